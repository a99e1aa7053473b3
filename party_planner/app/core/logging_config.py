"""
Logging configuration for the party planner.

Failures talking to the data service are never shown on the page; they
are reported through logging, so the log is the operator's view of the
system.  ``setup_logging`` attaches a console handler (and optionally a
file handler) to the root logger once per process.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Third-party loggers that are chatty at DEBUG/INFO.
_QUIET_LOGGERS = ("urllib3", "multipart")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure root logger.

    Does nothing if the root logger already has handlers, e.g. when
    uvicorn configured logging first or ``create_app`` runs again.

    Parameters
    ----------
    level : str
        Logging level name for the application (e.g. ``"DEBUG"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a file that receives the same records as the console.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
