from __future__ import annotations

import threading

import pytest

from orchestrator import log as event_log


def test_events_are_appended_as_json_lines(tmp_path):
    event_log.configure(tmp_path)
    path = event_log.append_event({"event": "generation.created", "seed": 1})
    event_log.append_event({"event": "generation.created", "seed": 2})

    assert event_log.current_log_path() == path
    assert path.name == "generation_00.jsonl"
    records = list(event_log.read_events(path))
    assert [record["seed"] for record in records] == [1, 2]
    assert all("ts" in record for record in records)


def test_files_rotate_by_size(tmp_path):
    log = event_log.EventLog(tmp_path, max_bytes=150)
    paths = {log.append({"event": "generation.skipped", "seed": n}) for n in range(6)}
    names = sorted(path.name for path in paths)
    assert len(names) > 1
    assert names[:2] == ["generation_00.jsonl", "generation_01.jsonl"]
    assert [record["seed"] for record in event_log.read_events(tmp_path)] == list(range(6))


def test_caller_timestamp_is_kept(tmp_path):
    log = event_log.EventLog(tmp_path)
    path = log.append({"event": "generation.created", "ts": "fixed"})
    assert next(event_log.read_events(path))["ts"] == "fixed"


def test_unnamed_event_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        event_log.EventLog(tmp_path).append({"seed": 1})


def test_concurrent_appends_keep_whole_lines(tmp_path):
    log = event_log.EventLog(tmp_path)

    def worker(offset):
        for n in range(25):
            log.append({"event": "generation.created", "seed": offset + n})

    threads = [threading.Thread(target=worker, args=(i * 100,)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    seeds = sorted(record["seed"] for record in event_log.read_events(tmp_path))
    assert seeds == sorted(i * 100 + n for i in range(4) for n in range(25))
