"""
Logging setup for the API process.

``create_app`` calls ``setup_logging`` with ``LOG_LEVEL`` and
``LOG_FILE`` from the settings.  Handlers installed here are named so
that repeated calls (one per ``create_app``) do not duplicate output,
while handlers installed by others (uvicorn, pytest) are left alone.
"""

import logging
from pathlib import Path
from typing import Optional

CONSOLE_HANDLER = "portfolio_api.console"
FILE_HANDLER = "portfolio_api.file"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _installed(logger: logging.Logger, name: str) -> bool:
    return any(handler.get_name() == name for handler in logger.handlers)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger for ``level`` and an optional log file.

    Unknown level names fall back to ``INFO``.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if not _installed(root, CONSOLE_HANDLER):
        console = logging.StreamHandler()
        console.set_name(CONSOLE_HANDLER)
        console.setFormatter(formatter)
        root.addHandler(console)

    if logfile and not _installed(root, FILE_HANDLER):
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.set_name(FILE_HANDLER)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
