"""
All configuration flags, options, settings to fine-tune the plugin.

All settings are grouped semantically just for convenience
(instead of a flat mega-object with all the values in it).

Some of the settings are flags, some are scalars, some are optional,
some are not (but all of them have reasonable defaults).
The values come either from the CLI options or from the environment
variables with the ``KUBEXAMPLE_`` prefix (e.g. ``KUBEXAMPLE_REQUEST_TIMEOUT``).
"""
import dataclasses


@dataclasses.dataclass
class NetworkingSettings:

    request_timeout: float | None = 5 * 60  # == aiohttp.client.DEFAULT_TIMEOUT
    """
    A timeout for the whole API request (connection, headers, and body).

    Measured in seconds. Set to `None` to wait forever.
    """

    connect_timeout: float | None = None
    """
    A timeout for establishing the connection to the API server.

    Measured in seconds. If `None`, only the request timeout applies.
    """


@dataclasses.dataclass
class Settings:
    networking: NetworkingSettings = dataclasses.field(default_factory=NetworkingSettings)
