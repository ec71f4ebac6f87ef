from __future__ import annotations

import json
from pathlib import Path

import pytest

from ansilog.config import default_config, load_config
from ansilog.models import Severity


def test_load_config_defaults(tmp_path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("{}", encoding="utf-8")

    config = load_config(config_path)

    assert config == default_config()
    assert config.max_len == 10_000
    assert config.retain_level is Severity.TRACE
    assert config.display_level is Severity.INFO
    assert config.log_level == "INFO"
    assert config.log_to_console is True
    assert config.log_to_ui is True
    assert config.level_prefix is True
    assert config.lock_timeout_seconds == 1.0


def test_load_config_reads_values(tmp_path) -> None:
    payload = {
        "max_len": 250,
        "retain_level": "Debug",
        "display_level": "Warning",
        "log_level": "debug",
        "log_to_console": False,
        "log_to_ui": True,
        "level_prefix": False,
        "lock_timeout_seconds": None,
    }
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps(payload), encoding="utf-8")

    config = load_config(config_path)

    assert config.max_len == 250
    assert config.retain_level is Severity.DEBUG
    assert config.display_level is Severity.WARN
    assert config.log_level == "DEBUG"
    assert config.log_to_console is False
    assert config.level_prefix is False
    assert config.lock_timeout_seconds is None


@pytest.mark.parametrize(
    "payload",
    [
        {"max_len": 0},
        {"max_len": 2.7},
        {"max_len": True},
        {"max_len": "100"},
        {"retain_level": "verbose"},
        {"display_level": "loud"},
        {"log_level": "loud"},
    ],
)
def test_load_config_rejects_invalid_values(tmp_path, payload) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(config_path)


def test_shipped_default_config_matches_defaults() -> None:
    config = load_config(Path(__file__).resolve().parent.parent / "config" / "default.json")

    assert config == default_config()
