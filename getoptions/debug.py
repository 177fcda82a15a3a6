"""
Process-wide diagnostic logging for the parser.

The parser writes DEBUG records (token classification, name resolution, value
accumulation) through loguru. As a library, getoptions keeps its records
disabled until the host opts in:

    >>> from getoptions import debug
    >>> debug.enable()              # rich handler on stderr
    >>> debug.enable(sys.stdout)    # or any loguru sink
    >>> debug.disable()

Parsing never depends on a sink being configured; with diagnostics disabled the
records are dropped by loguru before formatting.
"""
from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

from .utils import Unset

logger.disable(__package__)

_handler = None


def _default_sink():
    return RichHandler(
        console=Console(stderr=True),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def enable(sink=Unset, /, *, level="DEBUG"):
    """
    Turn diagnostics on and route them to a single sink.

    Any sink accepted by loguru works (a file object, a path, a callable, a
    logging.Handler). Calling enable() again replaces the previous sink.
    """
    global _handler
    disable()
    if sink is Unset:
        sink = _default_sink()
    _handler = logger.add(sink, level=level, format="{message}", filter=__package__)
    logger.enable(__package__)


def disable():
    """
    Turn diagnostics off and detach the sink installed by enable(), if any.
    """
    global _handler
    logger.disable(__package__)
    if _handler is not None:
        logger.remove(_handler)
        _handler = None


def enabled():
    return _handler is not None


__all__ = (
    "logger",
    "enable",
    "disable",
    "enabled",
)
