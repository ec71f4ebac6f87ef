from __future__ import annotations

import logging

from colorama import Fore, Style

from ansilog.models import TRACE

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_LEVEL_COLORS = {
    logging.CRITICAL: Fore.RED,
    logging.ERROR: Fore.RED,
    logging.WARNING: Fore.YELLOW,
    logging.INFO: Fore.CYAN,
    logging.DEBUG: Fore.MAGENTA,
    TRACE: Fore.WHITE,
}


class ColorFormatter(logging.Formatter):
    def __init__(self, fmt: str = DEFAULT_FORMAT, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelno)
        if not color:
            return super().format(record)

        # Other handlers share the record, so color a copy.
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        return super().format(colored)
