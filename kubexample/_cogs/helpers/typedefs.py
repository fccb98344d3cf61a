"""
Type aliases shared by the clients and the commands.

The stubs declare ``logging.LoggerAdapter`` as a generic class,
but it cannot be subscripted at runtime, so it is aliased here once.
"""
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    LoggerAdapter = logging.LoggerAdapter[Any]
else:
    LoggerAdapter = logging.LoggerAdapter

# Whatever the API calls log into: a module logger, or an adapter around it.
Logger = logging.Logger | LoggerAdapter
