from __future__ import annotations

from ansilog.ansi import iter_runs
from ansilog.models import Color, PresentedRecord, Severity, StyledRun

_BASE_COLORS: dict[Severity, Color] = {
    Severity.ERROR: Color.RED,
    Severity.WARN: Color.YELLOW,
    Severity.INFO: Color.DEFAULT,
    Severity.DEBUG: Color.DEFAULT,
    Severity.TRACE: Color.DEFAULT,
}


def base_color(severity: Severity) -> Color:
    return _BASE_COLORS[Severity(severity)]


class RecordPresenter:
    def __init__(self, level_prefix: bool = True) -> None:
        self._level_prefix = level_prefix

    def present(self, severity: Severity, text: str) -> PresentedRecord:
        severity = Severity(severity)
        color = base_color(severity)

        runs: list[StyledRun] = []
        if self._level_prefix:
            runs.append(StyledRun(f"[{severity.name}]: ", color))
        runs.extend(iter_runs(text, color))
        return PresentedRecord(severity=severity, runs=tuple(runs))
