"""
Logging setup for the plugin's commands.

The logs go to stderr, so that they never interfere with the tables on stdout.
The format is selected on the command line: plain, full, or json.
"""
import enum
import logging
from typing import TYPE_CHECKING, Any, TextIO

try:
    # python-json-logger>=3.1.0
    from pythonjsonlogger.core import RESERVED_ATTRS as _pjl_RESERVED_ATTRS
    from pythonjsonlogger.json import JsonFormatter as _pjl_JsonFormatter
except ImportError:
    # python-json-logger<3.1.0
    from pythonjsonlogger.jsonlogger import JsonFormatter as _pjl_JsonFormatter  # type: ignore
    from pythonjsonlogger.jsonlogger import RESERVED_ATTRS as _pjl_RESERVED_ATTRS  # type: ignore


class LogFormat(enum.Enum):
    """ Log formats, as specified on CLI. """
    PLAIN = '%(message)s'
    FULL = '[%(asctime)s] %(name)-20.20s [%(levelname)-8.8s] %(message)s'
    JSON = '-json-'  # not used for formatting, only for detection


class JsonFormatter(_pjl_JsonFormatter):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault('reserved_attrs', set(_pjl_RESERVED_ATTRS))
        kwargs.setdefault('timestamp', True)
        super().__init__(*args, **kwargs)

    def add_fields(
            self,
            log_record: dict[str, Any],
            record: logging.LogRecord,
            message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        if 'severity' not in log_record:
            log_record['severity'] = (
                "debug" if record.levelno <= logging.DEBUG else
                "info" if record.levelno <= logging.INFO else
                "warn" if record.levelno <= logging.WARNING else
                "error" if record.levelno <= logging.ERROR else
                "fatal")


# Used to identify and remove our own handlers on re-runs in tests: every CLI invocation
# in tests streams into a new stderr interceptor of Click's runner, and the previous ones
# can be already closed. So, the old handlers are replaced when the new one is added.
if TYPE_CHECKING:
    class _PluginStreamHandler(logging.StreamHandler[TextIO]):
        pass
else:
    class _PluginStreamHandler(logging.StreamHandler):
        pass


def configure(
        debug: bool | None = None,
        verbose: bool | None = None,
        quiet: bool | None = None,
        log_format: LogFormat = LogFormat.PLAIN,
) -> None:
    log_level = 'DEBUG' if debug else 'INFO' if verbose else 'ERROR' if quiet else 'WARNING'
    handler = _PluginStreamHandler()
    handler.setFormatter(make_formatter(log_format))
    logger = logging.getLogger()
    logger.handlers[:] = [h for h in logger.handlers if not isinstance(h, _PluginStreamHandler)]
    logger.addHandler(handler)
    logger.setLevel(log_level)

    # Prevent the low-level logging unless in the debug mode. Keep only the plugin's messages.
    for name in ['asyncio']:
        logger = logging.getLogger(name)
        logger.propagate = bool(debug)
        if not debug:
            logger.handlers[:] = [logging.NullHandler()]


def make_formatter(log_format: LogFormat | str = LogFormat.PLAIN) -> logging.Formatter:
    match log_format:
        case LogFormat.JSON:
            return JsonFormatter()
        case LogFormat():
            return logging.Formatter(log_format.value)
        case str():
            return logging.Formatter(log_format)
        case _:
            raise ValueError(f"Unsupported log format: {log_format!r}")
