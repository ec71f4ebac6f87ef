from __future__ import annotations

import re

from ansilog.ansi import strip_ansi
from ansilog.models import Severity

_LEVEL_TOKEN = re.compile(r"\b(ERROR|CRITICAL|WARN(?:ING)?|INFO|DEBUG|TRACE)\b", re.IGNORECASE)


def infer_severity(line: str, default: Severity = Severity.INFO) -> Severity:
    match = _LEVEL_TOKEN.search(strip_ansi(line))
    if not match:
        return default
    token = match.group(1).upper()
    if token == "CRITICAL":
        return Severity.ERROR
    return Severity.from_name(token)
