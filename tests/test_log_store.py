from __future__ import annotations

import threading

import pytest

from ansilog.log_store import LogStore, passes
from ansilog.models import LogRecord, Severity


def test_store_is_bounded_and_keeps_newest_first() -> None:
    store = LogStore(max_len=3)
    for index in range(5):
        store.push(Severity.INFO, f"line {index}")

    assert len(store) == 3
    assert [record.text for record in store.records()] == ["line 4", "line 3", "line 2"]


def test_store_below_capacity_keeps_everything() -> None:
    store = LogStore(max_len=10)
    for index in range(4):
        store.push(Severity.DEBUG, f"line {index}")

    assert len(store) == 4


def test_records_are_immutable_log_records() -> None:
    store = LogStore()
    store.push(Severity.WARN, "disk almost full")

    assert store.records() == [LogRecord(severity=Severity.WARN, text="disk almost full")]


@pytest.mark.parametrize("max_len", [0, -1, 2.5, True])
def test_invalid_max_len_is_rejected(max_len) -> None:
    with pytest.raises(ValueError):
        LogStore(max_len=max_len)


def test_clear_empties_store() -> None:
    store = LogStore()
    for index in range(5):
        store.push(Severity.ERROR, f"failure {index}")

    assert store.clear() is True
    assert len(store) == 0
    assert store.for_each_filtered(Severity.TRACE, lambda severity, text: None) == 0


def test_passes_uses_severity_order() -> None:
    assert passes(Severity.ERROR, Severity.WARN)
    assert passes(Severity.WARN, Severity.WARN)
    assert not passes(Severity.INFO, Severity.WARN)


def test_for_each_filtered_visits_matching_records_newest_first() -> None:
    store = LogStore()
    store.push(Severity.INFO, "started")
    store.push(Severity.DEBUG, "details")
    store.push(Severity.ERROR, "crashed")
    store.push(Severity.WARN, "slow")

    visited: list[tuple[Severity, str]] = []
    count = store.for_each_filtered(Severity.INFO, lambda severity, text: visited.append((severity, text)))

    assert count == 3
    assert visited == [
        (Severity.WARN, "slow"),
        (Severity.ERROR, "crashed"),
        (Severity.INFO, "started"),
    ]


def test_visitor_runs_without_holding_the_lock() -> None:
    store = LogStore(lock_timeout=0)
    store.push(Severity.INFO, "first")

    store.for_each_filtered(Severity.TRACE, lambda severity, text: store.push(Severity.INFO, "nested"))

    assert len(store) == 2
    assert store.degraded is False


def test_lock_failure_degrades_to_empty_results() -> None:
    store = LogStore(lock_timeout=0.01)
    store.push(Severity.INFO, "kept")

    store._lock.acquire()
    try:
        assert store.push(Severity.ERROR, "dropped") is False
        assert store.degraded is True
        assert len(store) == 0
        assert store.records() == []
        assert store.snapshot(Severity.TRACE) == ([], 0, False)
        assert store.for_each_filtered(Severity.TRACE, lambda severity, text: None) == 0
        assert store.clear() is False
    finally:
        store._lock.release()

    assert len(store) == 1
    assert store.degraded is False
    assert [record.text for record in store.records()] == ["kept"]


def test_snapshot_reports_store_size_with_selection() -> None:
    store = LogStore()
    store.push(Severity.TRACE, "noise")
    store.push(Severity.ERROR, "boom")

    selected, total, ok = store.snapshot(Severity.WARN)

    assert [record.text for record in selected] == ["boom"]
    assert total == 2
    assert ok is True


def test_concurrent_pushes_are_all_retained() -> None:
    store = LogStore(max_len=10_000, lock_timeout=None)
    threads_count = 8
    per_thread = 500

    def _producer(worker: int) -> None:
        for index in range(per_thread):
            store.push(Severity.INFO, f"{worker}-{index}")

    threads = [threading.Thread(target=_producer, args=(worker,)) for worker in range(threads_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    texts = [record.text for record in store.records()]
    assert len(store) == threads_count * per_thread
    assert len(set(texts)) == len(texts)

    for worker in range(threads_count):
        own = [int(text.split("-")[1]) for text in texts if text.startswith(f"{worker}-")]
        assert own == sorted(own, reverse=True)


def test_concurrent_pushes_respect_capacity() -> None:
    store = LogStore(max_len=1_000, lock_timeout=None)

    def _producer(worker: int) -> None:
        for index in range(400):
            store.push(Severity.WARN, f"{worker}-{index}")

    threads = [threading.Thread(target=_producer, args=(worker,)) for worker in range(6)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    texts = [record.text for record in store.records()]
    assert len(store) == 1_000
    assert len(set(texts)) == 1_000
