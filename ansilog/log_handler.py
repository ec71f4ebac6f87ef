from __future__ import annotations

import logging

from ansilog.formatting import ColorFormatter
from ansilog.log_store import LogStore, passes
from ansilog.models import Severity


class StoreHandler(logging.Handler):
    def __init__(self, store: LogStore, retain_level: Severity = Severity.TRACE) -> None:
        super().__init__()
        self._store = store
        self.retain_level = Severity(retain_level)
        self.setFormatter(ColorFormatter())

    @property
    def store(self) -> LogStore:
        return self._store

    def emit(self, record: logging.LogRecord) -> None:
        severity = Severity.from_logging_level(record.levelno)
        if not passes(severity, self.retain_level):
            return

        try:
            line = self.format(record)
        except Exception:
            self.handleError(record)
            return

        self._store.push(severity, line)
