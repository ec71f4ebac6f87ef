from __future__ import annotations

import json
import logging
from pathlib import Path

from ansilog.models import DEFAULT_MAX_LEN, AppConfig, Severity

_ALLOWED_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "TRACE"}


def default_config() -> AppConfig:
    return AppConfig()


def _parse_log_level(raw: object) -> str:
    level = str(raw).strip().upper()
    if level == "WARN":
        level = "WARNING"
    if level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"Invalid log_level: {raw}. Expected one of {sorted(_ALLOWED_LOG_LEVELS)}")
    return level


def log_level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level: {level}")
    return number


def load_config(path: str | Path) -> AppConfig:
    config_path = Path(path)
    payload = json.loads(config_path.read_text(encoding="utf-8"))

    max_len = payload.get("max_len", DEFAULT_MAX_LEN)
    if isinstance(max_len, bool) or not isinstance(max_len, int) or max_len < 1:
        raise ValueError(f"Invalid max_len: {max_len}. Expected a positive integer")

    raw_timeout = payload.get("lock_timeout_seconds", 1.0)
    lock_timeout = None if raw_timeout is None else max(float(raw_timeout), 0.0)

    return AppConfig(
        max_len=max_len,
        retain_level=Severity.from_name(str(payload.get("retain_level", "trace"))),
        display_level=Severity.from_name(str(payload.get("display_level", "info"))),
        log_level=_parse_log_level(payload.get("log_level", "INFO")),
        log_to_console=bool(payload.get("log_to_console", True)),
        log_to_ui=bool(payload.get("log_to_ui", True)),
        level_prefix=bool(payload.get("level_prefix", True)),
        lock_timeout_seconds=lock_timeout,
    )
