from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import TextIO

from colorama import Fore, Style

from ansilog.config import default_config, load_config
from ansilog.log_store import LogStore, passes
from ansilog.models import AppConfig, Color, Severity, Snapshot
from ansilog.presenter import RecordPresenter
from ansilog.utils import infer_severity
from ansilog.view import LogView

DEFAULT_CONFIG_PATH = "config/default.json"
_LEVEL_CHOICES = ["error", "warn", "info", "debug", "trace"]

_FORE_CODES = {
    Color.DEFAULT: Fore.RESET,
    Color.BLACK: Fore.BLACK,
    Color.RED: Fore.RED,
    Color.GREEN: Fore.GREEN,
    Color.YELLOW: Fore.YELLOW,
    Color.BLUE: Fore.BLUE,
    Color.MAGENTA: Fore.MAGENTA,
    Color.CYAN: Fore.CYAN,
    Color.WHITE: Fore.WHITE,
    Color.BRIGHT_BLACK: Fore.LIGHTBLACK_EX,
    Color.BRIGHT_RED: Fore.LIGHTRED_EX,
    Color.BRIGHT_GREEN: Fore.LIGHTGREEN_EX,
    Color.BRIGHT_YELLOW: Fore.LIGHTYELLOW_EX,
    Color.BRIGHT_BLUE: Fore.LIGHTBLUE_EX,
    Color.BRIGHT_MAGENTA: Fore.LIGHTMAGENTA_EX,
    Color.BRIGHT_CYAN: Fore.LIGHTCYAN_EX,
    Color.BRIGHT_WHITE: Fore.LIGHTWHITE_EX,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Retain log lines and decode their ANSI colors")
    subparsers = parser.add_subparsers(dest="command")

    view_parser = subparsers.add_parser("view", help="Load log lines and print the filtered view")
    view_parser.add_argument("file", nargs="?", help="Log file to read (defaults to stdin)")
    view_parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to JSON config")
    view_parser.add_argument("--level", choices=_LEVEL_CHOICES, help="Override display_level from config")
    view_parser.add_argument(
        "--format",
        choices=["text", "json", "plain"],
        default="text",
        help="Output format for the retained records",
    )

    return parser


def _normalized_argv(raw_argv: list[str]) -> list[str]:
    if not raw_argv or raw_argv[0] not in {"view"}:
        return ["view", *raw_argv]
    return raw_argv


def _default_base_dir() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parent.parent


def _resolve_config_path(raw_path: str) -> str:
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return str(candidate)

    if candidate.exists():
        return str(candidate.resolve())

    from_base = _default_base_dir() / candidate
    if from_base.exists():
        return str(from_base.resolve())

    return str(candidate)


def _resolve_config(args: argparse.Namespace) -> AppConfig:
    raw_path = getattr(args, "config", None) or DEFAULT_CONFIG_PATH
    config_path = _resolve_config_path(raw_path)
    if raw_path == DEFAULT_CONFIG_PATH and not Path(config_path).exists():
        config = default_config()
    else:
        config = load_config(config_path)

    level = getattr(args, "level", None)
    if level:
        config = replace(config, display_level=Severity.from_name(level))
    return config


def _read_lines(path: str | None) -> list[str]:
    if path:
        return Path(path).read_text(encoding="utf-8", errors="replace").splitlines()
    return sys.stdin.read().splitlines()


def render_text(snapshot: Snapshot) -> str:
    # Oldest first, so the newest record ends up at the bottom of the terminal.
    lines = []
    for record in reversed(snapshot.records):
        parts = [f"{_FORE_CODES[run.color]}{run.text}" for run in record.runs]
        lines.append("".join(parts) + Style.RESET_ALL)
    return "\n".join(lines)


def render_json(snapshot: Snapshot) -> str:
    payload = {
        "total": snapshot.total,
        "shown": snapshot.shown,
        "degraded": snapshot.degraded,
        "records": [
            {
                "severity": record.severity.name,
                "runs": [{"text": run.text, "color": run.color.value} for run in record.runs],
            }
            for record in snapshot.records
        ],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _view_command(args: argparse.Namespace, out: TextIO, err: TextIO) -> None:
    config = _resolve_config(args)
    store = LogStore(max_len=config.max_len, lock_timeout=config.lock_timeout_seconds)

    # Lines are stored oldest first so the newest line is the newest record.
    for line in _read_lines(args.file):
        severity = infer_severity(line)
        if passes(severity, config.retain_level):
            store.push(severity, line)

    view = LogView(store, RecordPresenter(level_prefix=config.level_prefix), threshold=config.display_level)

    if args.format == "plain":
        output = view.export_plain_text()
        snapshot = view.snapshot()
    else:
        snapshot = view.snapshot()
        output = render_json(snapshot) if args.format == "json" else render_text(snapshot)

    if output:
        print(output, file=out)
    print(view.status_line(snapshot), file=err)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    parsed = parser.parse_args(_normalized_argv(argv if argv is not None else sys.argv[1:]))

    if parsed.command == "view":
        _view_command(parsed, sys.stdout, sys.stderr)
        return

    parser.error("Unknown command")


if __name__ == "__main__":
    main()
