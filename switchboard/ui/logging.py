#!/usr/bin/env python3
# switchboard/ui/logging.py
from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from .ansi import ANSI, enable_windows_vt, strip_ansi, strip_markup
from .console import PRINT_MUTEX


class ColorizingStreamHandler(logging.StreamHandler):
    """StreamHandler that colors by level when the terminal speaks ANSI."""

    _LEVEL_COLORS = {
        logging.DEBUG: ANSI["bright_black"],
        logging.INFO: "",
        logging.WARNING: ANSI["yellow"],
        logging.ERROR: ANSI["red"],
        logging.CRITICAL: ANSI["magenta"],
    }

    def __init__(self, stream=None) -> None:
        super().__init__(stream)
        self._use_ansi = enable_windows_vt() and getattr(
            self.stream, "isatty", lambda: False)()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if self._use_ansi:
                color = self._LEVEL_COLORS.get(record.levelno, "")
                if color:
                    message = f"{color}{message}{ANSI['reset']}"
            else:
                message = strip_ansi(message)
            with PRINT_MUTEX:
                self.stream.write(message + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


class PlainFormatter(logging.Formatter):
    """Formatter that strips ANSI and markup (good for log files)."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_markup(strip_ansi(super().format(record)))


class _ShortNameFilter(logging.Filter):
    """Expose `record.short_name`: the logger name below the root logger."""

    def __init__(self, root: str) -> None:
        super().__init__()
        self._prefix = f"{root}." if root else ""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if self._prefix and name.startswith(self._prefix):
            name = name[len(self._prefix):]
        record.short_name = name
        return True


def _find_handler(logger: logging.Logger, kind: type) -> Optional[logging.Handler]:
    return next((h for h in logger.handlers if isinstance(h, kind)), None)


def init_logger(
    name: str = "switchboard",
    level: int | str = logging.INFO,
    logfile: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the package logger; safe to call again after a config reload.

    Console (stderr): level-coloured on a capable TTY, tagged with the module,
        e.g. '[WARNING] commands.dispatcher: ...'.
    File (optional): rotating, plain text, UTF-8, always at DEBUG. A different
        `logfile` on a later call replaces the previous file handler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    console_handler = _find_handler(logger, ColorizingStreamHandler)
    if console_handler is None:
        console_handler = ColorizingStreamHandler(stream=sys.stderr)
        console_handler.addFilter(_ShortNameFilter(name))
        console_handler.setFormatter(
            logging.Formatter("[%(levelname)s] %(short_name)s: %(message)s"))
        logger.addHandler(console_handler)
    console_handler.setLevel(level)

    file_handler = _find_handler(logger, RotatingFileHandler)
    if file_handler is not None and (
            not logfile or file_handler.baseFilename != os.path.abspath(logfile)):
        logger.removeHandler(file_handler)
        file_handler.close()
        file_handler = None

    if logfile and file_handler is None:
        file_handler = RotatingFileHandler(
            logfile, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(PlainFormatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)

    return logger
