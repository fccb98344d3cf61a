from kubexample._cogs.clients import api
from kubexample._cogs.configs import configuration
from kubexample._cogs.helpers import typedefs
from kubexample._cogs.structs import bodies, references

CORE_V1 = references.Resource('', 'v1', '')


async def read_resources(
        *,
        settings: configuration.Settings,
        logger: typedefs.Logger,
        group_version: references.Resource = CORE_V1,
) -> list[bodies.RawAPIResource]:
    """
    Read the resource kinds served by one group-version of the API (core v1 by default).

    Subresources (e.g. ``pods/log``, ``pods/status``) are returned too,
    exactly as the server lists them in its discovery document.
    """
    rsp = await api.get(group_version.get_version_url(), settings=settings, logger=logger)
    resources: list[bodies.RawAPIResource] = list(rsp.get('resources') or [])
    return resources
