import logging
import os
import sys
from typing import Optional, TextIO

from .formatting import LevelFormatter

LOGGER_NAME = 'bitunit'

log = logging.getLogger(LOGGER_NAME)
log.addHandler(logging.NullHandler())

_handler: Optional[logging.Handler] = None


def supports_color(stream: Optional[TextIO]) -> bool:
    if 'NO_COLOR' in os.environ:
        return False
    return stream is not None and stream.isatty()


def configure_logging(level: int, colored: bool = False) -> logging.Handler:
    """Send package log records to stderr

    Until this is called records only reach the null handler, so importing
    the library never produces output of its own.
    """
    global _handler
    if _handler is not None:
        log.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(LevelFormatter(colored))
    log.addHandler(_handler)
    log.setLevel(level)
    log.propagate = False
    return _handler
