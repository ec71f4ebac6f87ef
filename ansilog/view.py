from __future__ import annotations

from ansilog.ansi import strip_ansi
from ansilog.log_store import LogStore
from ansilog.models import Severity, Snapshot
from ansilog.presenter import RecordPresenter

DEGRADED_HINT = "Something went wrong loading the log"


class LogView:
    def __init__(
        self,
        store: LogStore,
        presenter: RecordPresenter | None = None,
        threshold: Severity = Severity.INFO,
    ) -> None:
        self._store = store
        self._presenter = presenter or RecordPresenter()
        # Display threshold only; what gets retained is decided by the handler.
        self.threshold = Severity(threshold)

    @property
    def store(self) -> LogStore:
        return self._store

    def clear(self) -> bool:
        return self._store.clear()

    def snapshot(self, threshold: Severity | None = None) -> Snapshot:
        effective = self.threshold if threshold is None else Severity(threshold)
        selected, total, ok = self._store.snapshot(effective)

        # Decoding runs after the store lock has been released.
        records = [self._presenter.present(record.severity, record.text) for record in selected]
        return Snapshot(records=records, shown=len(records), total=total, degraded=not ok)

    def export_plain_text(self, threshold: Severity | None = None, strip_styles: bool = True) -> str:
        effective = self.threshold if threshold is None else Severity(threshold)
        lines = [
            strip_ansi(record.text) if strip_styles else record.text
            for record in self._store.records(effective)
        ]
        return "\n".join(lines)

    @staticmethod
    def status_line(snapshot: Snapshot) -> str:
        if snapshot.degraded:
            return DEGRADED_HINT
        return f"Log size: {snapshot.total} | Displayed: {snapshot.shown}"
