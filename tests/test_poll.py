import os
import threading
import time

import pytest

from pollwatch.errors import ErrorCode, FswError
from pollwatch.events import EventFlag, FilterType, MonitorFilter
from pollwatch.poll import PollMonitor


def _noop(events, context):
    pass


def _by_path(events):
    return {e.path: e.flags for e in events}


def test_min_poll_latency_is_one_second(tmp_path):
    monitor = PollMonitor([str(tmp_path)], _noop)
    assert monitor.MIN_POLL_LATENCY == 1


def test_no_changes_yield_no_events(tmp_path):
    (tmp_path / "a.txt").write_text("x")
    monitor = PollMonitor([str(tmp_path)], _noop)
    monitor.recursive = True
    monitor.collect_initial_data()
    assert monitor.collect_data() == []


def test_created_file_is_reported(tmp_path):
    monitor = PollMonitor([str(tmp_path)], _noop)
    monitor.recursive = True
    monitor.collect_initial_data()
    new_file = tmp_path / "new.txt"
    new_file.write_text("hello")
    events = _by_path(monitor.collect_data())
    assert events[str(new_file)] == (EventFlag.Created,)


def test_removed_file_is_reported(tmp_path):
    victim = tmp_path / "gone.txt"
    victim.write_text("bye")
    monitor = PollMonitor([str(tmp_path)], _noop)
    monitor.recursive = True
    monitor.collect_initial_data()
    victim.unlink()
    events = _by_path(monitor.collect_data())
    assert events[str(victim)] == (EventFlag.Removed,)


def test_updated_file_is_reported(tmp_path):
    target = tmp_path / "data.txt"
    target.write_text("v1")
    monitor = PollMonitor([str(tmp_path)], _noop)
    monitor.recursive = True
    monitor.collect_initial_data()
    st = os.stat(target)
    os.utime(target, (st.st_atime, st.st_mtime + 100))
    events = _by_path(monitor.collect_data())
    assert EventFlag.Updated in events[str(target)]


def test_removal_reported_once(tmp_path):
    victim = tmp_path / "gone.txt"
    victim.write_text("bye")
    monitor = PollMonitor([str(tmp_path)], _noop)
    monitor.recursive = True
    monitor.collect_initial_data()
    victim.unlink()
    monitor.collect_data()
    assert str(victim) not in _by_path(monitor.collect_data())


def test_non_recursive_ignores_children(tmp_path):
    monitor = PollMonitor([str(tmp_path)], _noop)
    monitor.collect_initial_data()
    (tmp_path / "child.txt").write_text("x")
    paths = [e.path for e in monitor.collect_data()]
    assert str(tmp_path / "child.txt") not in paths


def test_missing_path_is_ignored(tmp_path):
    monitor = PollMonitor([str(tmp_path / "missing")], _noop)
    monitor.collect_initial_data()
    assert monitor.collect_data() == []


def test_exclude_filter_hides_path(tmp_path):
    monitor = PollMonitor([str(tmp_path)], _noop)
    monitor.recursive = True
    monitor.filters = [MonitorFilter(r"\.log$", FilterType.EXCLUDE)]
    monitor.collect_initial_data()
    (tmp_path / "skip.log").write_text("x")
    (tmp_path / "keep.txt").write_text("x")
    paths = [e.path for e in monitor.collect_data()]
    assert str(tmp_path / "skip.log") not in paths
    assert str(tmp_path / "keep.txt") in paths


def test_include_filter_overrides_exclude(tmp_path):
    monitor = PollMonitor([str(tmp_path)], _noop)
    monitor.recursive = True
    monitor.filters = [
        MonitorFilter(".*", FilterType.EXCLUDE),
        MonitorFilter(r"\.txt$", FilterType.INCLUDE),
    ]
    monitor.collect_initial_data()
    monitor.recursive = True
    (tmp_path / "a.txt").write_text("x")
    # The root itself is excluded, so its children are never visited.
    assert monitor.collect_data() == []


def test_invalid_regex_raises(tmp_path):
    monitor = PollMonitor([str(tmp_path)], _noop)
    monitor.filters = [MonitorFilter("(", FilterType.EXCLUDE)]
    with pytest.raises(FswError) as info:
        monitor.collect_initial_data()
    assert info.value.code == ErrorCode.INVALID_REGEX


def test_start_and_stop(tmp_path):
    received = []
    got = threading.Event()

    def callback(events, context):
        received.append((events, context))
        got.set()

    monitor = PollMonitor([str(tmp_path)], callback, "ctx")
    monitor.recursive = True
    worker = threading.Thread(target=monitor.start)
    worker.start()
    deadline = time.time() + 3
    while not monitor.is_running() and time.time() < deadline:
        time.sleep(0.01)
    assert monitor.is_running()
    time.sleep(0.3)
    (tmp_path / "created.txt").write_text("x")
    assert got.wait(5)
    monitor.stop()
    worker.join(5)
    assert not worker.is_alive()
    assert not monitor.is_running()
    events, context = received[0]
    assert context == "ctx"
    assert str(tmp_path / "created.txt") in [e.path for e in events]