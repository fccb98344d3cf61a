"""
Running a single command from login to the closed session.

Every invocation of the plugin is a single shot: login once, open one session,
make one request, close the session, exit. Nothing is retried: all failures
are final and are escalated to the CLI as :class:`CommandFailed`.
"""
import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import aiohttp

from kubexample._cogs.clients import auth, errors
from kubexample._cogs.structs import credentials
from kubexample._core.engines import activities

logger = logging.getLogger(__name__)

LOGIN_FAILURE = "Unable to get cluster configuration"

# The failures of the API calls. Other errors are the bugs, and are escalated as is.
API_FAILURES = (errors.APIError, aiohttp.ClientError, asyncio.TimeoutError)

_T = TypeVar('_T')


class CommandFailed(Exception):
    """ A command could not be completed: a fixed diagnostic and its reason. """

    def __init__(self, message: str, *, reason: BaseException) -> None:
        super().__init__(message)
        self.message = message
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.message}\n{self.reason}"


def run(
        command: Callable[[], Awaitable[_T]],
        *,
        failure: str,
        connection_info: credentials.ConnectionInfo | None = None,
) -> _T:
    """
    Login (unless the credentials are given) and run a command in a new event loop.

    The login failures are reported as :data:`LOGIN_FAILURE`,
    the API failures are reported with the command-specific message.
    """
    try:
        info = connection_info if connection_info is not None else activities.authenticate()
        return asyncio.run(run_in_context(command, info=info))
    except credentials.LoginError as e:
        raise CommandFailed(LOGIN_FAILURE, reason=e) from e
    except API_FAILURES as e:
        raise CommandFailed(failure, reason=e) from e


async def run_in_context(
        command: Callable[[], Awaitable[_T]],
        *,
        info: credentials.ConnectionInfo,
) -> _T:
    try:
        context = auth.APIContext(info)
    except (OSError, ValueError) as e:  # ssl.SSLError is an OSError; binascii.Error is a ValueError.
        raise credentials.LoginError(f"Cannot use the credentials for {info.server}: {e}") from e

    logger.debug(f"Connecting to {context.server}")
    token = auth.context_var.set(context)
    try:
        async with context:
            return await command()
    finally:
        auth.context_var.reset(token)
