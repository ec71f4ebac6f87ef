from __future__ import annotations

import threading
from collections import deque
from typing import Callable, TypeVar

from ansilog.models import DEFAULT_MAX_LEN, LogRecord, Severity

T = TypeVar("T")

Visitor = Callable[[Severity, str], None]


def passes(severity: Severity, threshold: Severity) -> bool:
    return severity <= threshold


class LogStore:
    def __init__(self, max_len: int = DEFAULT_MAX_LEN, lock_timeout: float | None = 1.0) -> None:
        if isinstance(max_len, bool) or not isinstance(max_len, int) or max_len < 1:
            raise ValueError(f"max_len must be a positive integer, got {max_len!r}")
        if lock_timeout is not None and lock_timeout < 0:
            raise ValueError(f"lock_timeout must be >= 0 or None, got {lock_timeout!r}")

        self._max_len = max_len
        self._lock_timeout = -1 if lock_timeout is None else lock_timeout
        # Index 0 is the newest record; appendleft evicts from the right.
        self._records: deque[LogRecord] = deque(maxlen=max_len)
        self._lock = threading.Lock()
        self._degraded = False

    @property
    def max_len(self) -> int:
        return self._max_len

    @property
    def degraded(self) -> bool:
        return self._degraded

    def _try_locked(self, action: Callable[[deque[LogRecord]], T]) -> tuple[bool, T | None]:
        if not self._lock.acquire(timeout=self._lock_timeout):
            self._degraded = True
            return False, None
        try:
            result = action(self._records)
        finally:
            self._lock.release()
        self._degraded = False
        return True, result

    def push(self, severity: Severity, text: str) -> bool:
        record = LogRecord(severity=Severity(severity), text=text)
        ok, _ = self._try_locked(lambda records: records.appendleft(record))
        return ok

    def clear(self) -> bool:
        ok, _ = self._try_locked(lambda records: records.clear())
        return ok

    def __len__(self) -> int:
        _, size = self._try_locked(len)
        return size or 0

    def records(self, threshold: Severity | None = None) -> list[LogRecord]:
        if threshold is None:
            _, selected = self._try_locked(list)
        else:
            _, selected = self._try_locked(
                lambda records: [record for record in records if passes(record.severity, threshold)]
            )
        return selected or []

    def snapshot(self, threshold: Severity | None = None) -> tuple[list[LogRecord], int, bool]:
        def _select(records: deque[LogRecord]) -> tuple[list[LogRecord], int]:
            if threshold is None:
                return list(records), len(records)
            selected = [record for record in records if passes(record.severity, threshold)]
            return selected, len(records)

        ok, result = self._try_locked(_select)
        if not ok or result is None:
            return [], 0, False
        selected, total = result
        return selected, total, True

    def for_each_filtered(self, threshold: Severity, visit: Visitor) -> int:
        selected = self.records(threshold)
        for record in selected:
            visit(record.severity, record.text)
        return len(selected)
