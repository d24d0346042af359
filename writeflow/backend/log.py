"""Logging for the desktop backend, built on loguru.

Two sinks: stderr for whoever launched the process, and a rotating file
under the data root (``<data_root>/logs/writeflow.log``) so a desktop
install keeps a log the user can attach to a bug report.

Stdlib loggers (uvicorn, SQLAlchemy, aiosqlite, httpx) are routed into
loguru.  Their verbosity follows ``log_level``: SQL statements are logged
only at DEBUG, and driver chatter never goes below WARNING.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

from writeflow.backend.settings import WriteflowSettings

LOG_DIRNAME = "logs"
LOG_FILENAME = "writeflow.log"

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}"

# stdlib logger -> minimum level it may emit at, whatever ``log_level`` says.
_LIBRARY_FLOORS = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "aiosqlite": logging.WARNING,
}


class _LoguruBridge(logging.Handler):
    """Forward stdlib log records to loguru, keeping the original call site."""

    def emit(self, record: logging.LogRecord) -> None:
        level: str | int
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        depth = 1
        frame = sys._getframe(1)
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(settings: WriteflowSettings) -> None:
    """Install the stderr and file sinks and bridge stdlib logging.

    Safe to call more than once (each CLI command calls it); previous
    sinks are replaced.
    """
    level = settings.log_level.upper()

    logger.remove()
    logger.add(sys.stderr, level=level, format=_FORMAT)
    if settings.log_to_file:
        log_path = settings.resolve_data_root() / LOG_DIRNAME / LOG_FILENAME
        logger.add(log_path, level=level, format=_FORMAT, rotation="5 MB", retention=5, encoding="utf-8")

    logging.basicConfig(handlers=[_LoguruBridge()], level=0, force=True)

    numeric = logging.getLevelName(level)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    for name, floor in _LIBRARY_FLOORS.items():
        logging.getLogger(name).setLevel(max(floor, numeric))
    # SQLAlchemy logs every statement at INFO; keep that to DEBUG runs.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if numeric <= logging.DEBUG else logging.WARNING)

    logger.info("Logging initialised (level={}, file={})", level, settings.log_to_file)
