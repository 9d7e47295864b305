"""A monitor that detects changes by periodically statting the watched paths."""

from __future__ import annotations

import os
import re
import stat
import sys
import threading
import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from pollwatch.errors import ErrorCode, FswError
from pollwatch.events import (
    Event,
    EventFlag,
    EventTypeFilter,
    FilterType,
    MonitorFilter,
)
from pollwatch.logs import flog, flogf
from pollwatch.paths import get_directory_entries, stat_path

EventCallback = Callable[[List[Event], Any], None]
PathVisitor = Callable[[str, os.stat_result], bool]

# Modification and change times of a tracked path, in whole seconds.
_FileInfo = Tuple[int, int]


class PollMonitor:
    """Watches paths by comparing their modification and change times.

    Every ``latency`` seconds (never less than one) the watched paths are
    scanned again and the differences with the previous scan are reported
    to ``callback`` as a list of events, together with ``context``.
    """

    MIN_POLL_LATENCY = 1.0

    def __init__(
        self,
        paths: Sequence[str],
        callback: EventCallback,
        context: Any = None,
    ) -> None:
        self.paths: List[str] = [os.fspath(p) for p in paths]
        self.callback = callback
        self.context = context
        self.latency: float = 1.0
        self.recursive = False
        self.follow_symlinks = False
        self.directory_only = False
        self.allow_overflow = False
        self.filters: List[MonitorFilter] = []
        self.event_type_filters: List[EventTypeFilter] = []
        self.properties: Dict[str, str] = {}

        self._previous: Dict[str, _FileInfo] = {}
        self._new: Dict[str, _FileInfo] = {}
        self._events: List[Event] = []
        self._curr_time = int(time.time())

        self._run_lock = threading.Lock()
        self._stop_requested = threading.Event()
        self._running = False

    # Path filtering

    def _matches(self, monitor_filter: MonitorFilter, path: str) -> bool:
        flags = 0 if monitor_filter.case_sensitive else re.IGNORECASE
        try:
            return re.search(monitor_filter.text, path, flags) is not None
        except re.error as error:
            raise FswError(
                f"Invalid regular expression: {monitor_filter.text}: {error}",
                ErrorCode.INVALID_REGEX,
            ) from None

    def _accept_path(self, path: str) -> bool:
        excluded = False
        for monitor_filter in self.filters:
            if not self._matches(monitor_filter, path):
                continue
            if monitor_filter.type == FilterType.INCLUDE:
                return True
            excluded = True
        return not excluded

    # Scan callbacks

    @staticmethod
    def _info(st: os.stat_result) -> _FileInfo:
        return int(st.st_mtime), int(st.st_ctime)

    def _initial_scan_callback(self, path: str, st: os.stat_result) -> bool:
        if path in self._previous:
            return False
        self._previous[path] = self._info(st)
        return True

    def _intermediate_scan_callback(self, path: str, st: os.stat_result) -> bool:
        if path in self._new:
            return False

        mtime, ctime = self._info(st)
        self._new[path] = (mtime, ctime)

        previous = self._previous.pop(path, None)
        if previous is None:
            self._events.append(Event(path, self._curr_time, (EventFlag.Created,)))
            return True

        prev_mtime, prev_ctime = previous
        flags = []
        if mtime > prev_mtime:
            flags.append(EventFlag.Updated)
        if ctime > prev_ctime:
            flags.append(EventFlag.AttributeModified)
        if flags:
            self._events.append(Event(path, self._curr_time, tuple(flags)))
        return True

    # Scanning

    def _scan(self, path: str, visitor: PathVisitor) -> None:
        try:
            try:
                link_status = os.lstat(path)
            except FileNotFoundError:
                return

            if self.follow_symlinks and stat.S_ISLNK(link_status.st_mode):
                self._scan(os.readlink(path), visitor)
                return

            if not self._accept_path(path):
                return

            st = stat_path(path, self.follow_symlinks)
            if st is None:
                return
            if not visitor(path, st):
                return
            if not self.recursive or not stat.S_ISDIR(st.st_mode):
                return

            for entry in get_directory_entries(path):
                self._scan(entry.path, visitor)
        except OSError as error:
            flogf(sys.stderr, "Filesystem error: %s", error)

    def _find_removed_files(self) -> None:
        for path in self._previous:
            self._events.append(Event(path, self._curr_time, (EventFlag.Removed,)))

    def _swap_data_containers(self) -> None:
        self._previous = self._new
        self._new = {}

    def collect_initial_data(self) -> None:
        """Record the current state of the watched paths."""
        for path in self.paths:
            self._scan(path, self._initial_scan_callback)

    def collect_data(self) -> List[Event]:
        """Scan again and return the changes since the previous scan."""
        self._curr_time = int(time.time())
        for path in self.paths:
            self._scan(path, self._intermediate_scan_callback)
        self._find_removed_files()
        self._swap_data_containers()
        events, self._events = self._events, []
        return events

    # Notification

    def _filter_flags(self, event: Event) -> Tuple[EventFlag, ...]:
        if not self.event_type_filters:
            return event.flags
        wanted = {f.flag for f in self.event_type_filters}
        return tuple(flag for flag in event.flags if flag in wanted)

    def _notify_events(self, events: List[Event]) -> None:
        accepted = []
        for event in events:
            flags = self._filter_flags(event)
            if flags:
                accepted.append(Event(event.path, event.time, flags))
        if accepted:
            self.callback(accepted, self.context)

    # Life cycle

    def is_running(self) -> bool:
        """Whether the monitor loop is executing."""
        with self._run_lock:
            return self._running

    def stop(self) -> None:
        """Ask a running monitor loop to end."""
        self._stop_requested.set()

    def start(self) -> None:
        """Run the monitor loop; returns once :meth:`stop` has been called."""
        with self._run_lock:
            if self._running:
                raise FswError(
                    "The monitor is already running.", ErrorCode.MONITOR_ALREADY_RUNNING
                )
            self._running = True

        try:
            self.collect_initial_data()
            while not self._stop_requested.is_set():
                flog(sys.stderr, "Done scanning.\n")
                delay = max(self.latency, self.MIN_POLL_LATENCY)
                if self._stop_requested.wait(delay):
                    break
                events = self.collect_data()
                if events:
                    self._notify_events(events)
        finally:
            with self._run_lock:
                self._running = False
                self._stop_requested.clear()