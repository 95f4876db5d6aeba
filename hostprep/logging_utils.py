from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = "install.log"
FALLBACK_LOG_PATH = os.path.join(tempfile.gettempdir(), "hostprep-install.log")

FILE_FORMAT = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)
# Console lines are bare messages ("SUCCESS: <url>", "ERROR: ...").
CONSOLE_FORMAT = logging.Formatter(fmt="%(message)s")

logger = logging.getLogger(__name__)


class InstallLogHandler(logging.FileHandler):
    """Appends to the install log. At most one is attached to the root logger."""


def current_log_path() -> Optional[str]:
    for h in logging.getLogger().handlers:
        if isinstance(h, InstallLogHandler):
            return h.baseFilename
    return None


def _open_install_log(path: str) -> InstallLogHandler:
    Path(os.path.dirname(path) or ".").mkdir(parents=True, exist_ok=True)
    handler = InstallLogHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(FILE_FORMAT)
    return handler


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Attach the install log (and a console echo) to the root logger.

    Appends across runs so a failed bootstrap and its retry share one file.
    Falls back to FALLBACK_LOG_PATH when the requested path cannot be opened.
    Calling it again keeps the log already in use.

    Returns the absolute path of the install log.
    """

    root = logging.getLogger()
    root.setLevel(level)

    existing = current_log_path()
    if existing is not None:
        return existing

    try:
        handler = _open_install_log(log_path)
    except OSError as e:
        handler = _open_install_log(FALLBACK_LOG_PATH)
        root.addHandler(handler)
        logger.warning("Cannot write %s (%s); logging to %s instead", log_path, e, handler.baseFilename)
    else:
        root.addHandler(handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(CONSOLE_FORMAT)
        root.addHandler(console)

    logger.info("Install log: %s", handler.baseFilename)
    return handler.baseFilename
