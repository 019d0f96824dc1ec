"""
Logging configuration for the service.

``setup_logging`` installs one console handler, and a file handler
when ``LOG_FILE`` is set, on the root logger.  The store and API log
through ``logging.getLogger(__name__)`` and reach those handlers by
propagation.

Uvicorn normally installs its own handlers on the ``uvicorn`` loggers.
``run.py`` starts it with ``log_config=None`` and this module strips
any handlers left on those loggers, so server lifecycle messages,
access lines and store write failures all end up in the same stream
and the same file, with one format.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER = "model_store_api.console"
FILE_HANDLER = "model_store_api.file"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _handler_names(logger: logging.Logger) -> set:
    return {handler.get_name() for handler in logger.handlers}


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger and route uvicorn's loggers through it.

    Safe to call more than once (``create_app`` runs for every app the
    tests build): handlers are only added if not already present, and
    a file handler is added if a later call names a log file.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file that receives the same records as the console.
    """
    root = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    present = _handler_names(root)

    if CONSOLE_HANDLER not in present:
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if logfile and FILE_HANDLER not in present:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.set_name(FILE_HANDLER)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
        server_logger.setLevel(numeric_level)
