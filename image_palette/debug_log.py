"""Opt-in debug logging, driven by ``IMAGE_PALETTE_DEBUG``/``IMAGE_PALETTE_DEBUG_LOG``."""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path


logger = logging.getLogger("image_palette")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEBUG_LOG_PATH: Path | None = None
_EXCEPTION_HOOK_INSTALLED = False


def _install_excepthook(root_logger: logging.Logger) -> None:
    global _EXCEPTION_HOOK_INSTALLED
    if _EXCEPTION_HOOK_INSTALLED:
        return
    previous_hook = sys.excepthook

    def _logging_excepthook(exc_type, exc_value, exc_traceback, _prev=previous_hook):
        root_logger.error(
            "Unhandled exception",
            exc_info=(exc_type, exc_value, exc_traceback),
        )
        _prev(exc_type, exc_value, exc_traceback)

    sys.excepthook = _logging_excepthook
    _EXCEPTION_HOOK_INSTALLED = True


def setup_debug_logging(*, verbose: bool = False) -> Path | None:
    """Configure logging for command-line use.

    ``verbose`` sends debug output to stderr. The environment variables add a
    debug log file; the returned path is that file, if any.
    """

    global DEBUG_LOG_PATH
    root_logger = logging.getLogger()
    if verbose:
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.setLevel(logging.DEBUG)
        root_logger.handlers = [
            h for h in root_logger.handlers if type(h) is not logging.StreamHandler
        ]
        root_logger.addHandler(stream)

    if not os.environ.get("IMAGE_PALETTE_DEBUG"):
        if not verbose and not logger.handlers:
            logger.addHandler(logging.NullHandler())
        return None

    log_path = Path(os.environ.get("IMAGE_PALETTE_DEBUG_LOG", "image_palette_debug.log"))
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.setLevel(logging.DEBUG)
    # replace any file handler from an earlier call
    for old in [h for h in root_logger.handlers if isinstance(h, logging.FileHandler)]:
        root_logger.removeHandler(old)
        old.close()
    root_logger.addHandler(handler)
    DEBUG_LOG_PATH = log_path
    root_logger.info("image-palette debug logging enabled at %s", log_path)
    _install_excepthook(root_logger)
    return log_path
