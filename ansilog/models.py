from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

DEFAULT_MAX_LEN = 10_000


class Severity(IntEnum):
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5

    @classmethod
    def from_name(cls, name: str) -> Severity:
        normalized = name.strip().upper()
        if normalized == "WARNING":
            normalized = "WARN"
        try:
            return cls[normalized]
        except KeyError:
            raise ValueError(f"Invalid severity: {name!r}") from None

    @classmethod
    def from_logging_level(cls, levelno: int) -> Severity:
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE


class Color(Enum):
    DEFAULT = "default"
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"
    BRIGHT_BLACK = "bright_black"
    BRIGHT_RED = "bright_red"
    BRIGHT_GREEN = "bright_green"
    BRIGHT_YELLOW = "bright_yellow"
    BRIGHT_BLUE = "bright_blue"
    BRIGHT_MAGENTA = "bright_magenta"
    BRIGHT_CYAN = "bright_cyan"
    BRIGHT_WHITE = "bright_white"


@dataclass(frozen=True)
class LogRecord:
    severity: Severity
    text: str


@dataclass(frozen=True)
class StyledRun:
    text: str
    color: Color


@dataclass(frozen=True)
class PresentedRecord:
    severity: Severity
    runs: tuple[StyledRun, ...]

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True)
class Snapshot:
    records: list[PresentedRecord] = field(default_factory=list)
    shown: int = 0
    total: int = 0
    degraded: bool = False


@dataclass(frozen=True)
class AppConfig:
    max_len: int = DEFAULT_MAX_LEN
    retain_level: Severity = Severity.TRACE
    display_level: Severity = Severity.INFO
    log_level: str = "INFO"
    log_to_console: bool = True
    log_to_ui: bool = True
    level_prefix: bool = True
    lock_timeout_seconds: float | None = 1.0
