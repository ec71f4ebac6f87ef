from __future__ import annotations

import logging
import sys

from colorama import just_fix_windows_console

from ansilog.config import log_level_number
from ansilog.formatting import ColorFormatter
from ansilog.log_handler import StoreHandler
from ansilog.log_store import LogStore
from ansilog.models import AppConfig

LOGGER = logging.getLogger("ansilog.logging_setup")

_CONSOLE_HANDLER_NAME = "ansilog-console"
_STORE_HANDLER_NAME = "ansilog-store"


def _find_handler(root: logging.Logger, name: str) -> logging.Handler | None:
    for handler in root.handlers:
        if handler.get_name() == name:
            return handler
    return None


def configure_logging(config: AppConfig, store: LogStore | None = None) -> LogStore:
    root = logging.getLogger()
    root.setLevel(log_level_number(config.log_level))

    existing_store = _find_handler(root, _STORE_HANDLER_NAME)
    if store is None:
        if isinstance(existing_store, StoreHandler):
            store = existing_store.store
        else:
            store = LogStore(max_len=config.max_len, lock_timeout=config.lock_timeout_seconds)

    console = _find_handler(root, _CONSOLE_HANDLER_NAME)
    if config.log_to_console and console is None:
        just_fix_windows_console()
        console = logging.StreamHandler(sys.stderr)
        console.set_name(_CONSOLE_HANDLER_NAME)
        console.setFormatter(ColorFormatter())
        root.addHandler(console)
    elif not config.log_to_console and console is not None:
        root.removeHandler(console)

    if existing_store is not None and (not config.log_to_ui or existing_store.store is not store):
        root.removeHandler(existing_store)
        existing_store = None

    if config.log_to_ui:
        if isinstance(existing_store, StoreHandler):
            existing_store.retain_level = config.retain_level
        else:
            handler = StoreHandler(store, retain_level=config.retain_level)
            handler.set_name(_STORE_HANDLER_NAME)
            root.addHandler(handler)

    LOGGER.debug(
        "Logging configured level=%s retain_level=%s max_len=%s",
        config.log_level,
        config.retain_level.name,
        store.max_len,
    )
    return store
