"""Monitoring sessions: configure a monitor, start it and stop it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from pollwatch import factory
from pollwatch.errors import ErrorCode, FswError
from pollwatch.events import Event, EventFlag, EventTypeFilter, MonitorFilter, MonitorType
from pollwatch.library import set_last_error
from pollwatch.poll import PollMonitor

SessionCallback = Callable[[List[Event], Any], None]


@dataclass
class _CallbackContext:
    session: "Session"
    callback: SessionCallback
    data: Any


def _callback_proxy(events: List[Event], context: Optional[_CallbackContext]) -> None:
    if context is None:
        raise FswError("The callback context has not been set.", ErrorCode.MISSING_CONTEXT)
    context.callback(list(events), context.data)


class Session:
    """A monitoring session holding a monitor's configuration.

    Configuration changes take effect the next time :meth:`start` is
    called. Every operation records its status as the calling thread's
    last error; failures raise FswError carrying the same code.
    """

    def __init__(self, monitor_type: Union[MonitorType, int] = MonitorType.SYSTEM_DEFAULT) -> None:
        self.monitor_type = MonitorType(monitor_type)
        self.paths: List[str] = []
        self.callback: Optional[SessionCallback] = None
        self.data: Any = None
        self.latency: float = 0.0
        self.allow_overflow = False
        self.recursive = False
        self.directory_only = False
        self.follow_symlinks = False
        self.filters: List[MonitorFilter] = []
        self.event_type_filters: List[EventTypeFilter] = []
        self.properties: Dict[str, str] = {}
        self._monitor: Optional[PollMonitor] = None
        self._destroyed = False

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if not self._destroyed:
            self.destroy()

    @property
    def monitor(self) -> Optional[PollMonitor]:
        """The monitor created by the first start, if any."""
        return self._monitor

    # Helpers

    @staticmethod
    def _fail(code: ErrorCode, message: str) -> None:
        set_last_error(code)
        raise FswError(message, code)

    def _check(self) -> None:
        if self._destroyed:
            self._fail(ErrorCode.SESSION_UNKNOWN, "The session has been destroyed.")

    @staticmethod
    def _ok() -> None:
        set_last_error(ErrorCode.OK)

    # Configuration

    def add_path(self, path: Optional[str]) -> None:
        """Add a path to watch."""
        if path is None:
            self._fail(ErrorCode.INVALID_PATH, "The path is invalid.")
        self._check()
        self.paths.append(str(path))
        self._ok()

    def add_property(self, name: Optional[str], value: Optional[str]) -> None:
        """Set a monitor property."""
        if name is None or value is None:
            self._fail(ErrorCode.INVALID_PROPERTY, "The property is invalid.")
        self._check()
        self.properties[name] = value
        self._ok()

    def set_callback(self, callback: Optional[SessionCallback], data: Any = None) -> None:
        """Set the function called with ``(events, data)`` on changes."""
        if callback is None or not callable(callback):
            self._fail(ErrorCode.INVALID_CALLBACK, "The callback is invalid.")
        self._check()
        self.callback = callback
        self.data = data
        self._ok()

    def set_allow_overflow(self, allow_overflow: bool) -> None:
        """Allow the monitor to report overflows as events."""
        self._check()
        self.allow_overflow = bool(allow_overflow)
        self._ok()

    def set_latency(self, latency: float) -> None:
        """Set the monitor latency in seconds; zero keeps the monitor default."""
        if latency < 0:
            self._fail(ErrorCode.INVALID_LATENCY, "The latency is invalid.")
        self._check()
        self.latency = float(latency)
        self._ok()

    def set_recursive(self, recursive: bool) -> None:
        """Watch directories recursively or not."""
        self._check()
        self.recursive = bool(recursive)
        self._ok()

    def set_directory_only(self, directory_only: bool) -> None:
        """Watch only directories during a recursive scan."""
        self._check()
        self.directory_only = bool(directory_only)
        self._ok()

    def set_follow_symlinks(self, follow_symlinks: bool) -> None:
        """Follow symbolic links or not."""
        self._check()
        self.follow_symlinks = bool(follow_symlinks)
        self._ok()

    def add_event_type_filter(self, event_type: Union[EventTypeFilter, EventFlag]) -> None:
        """Accept only events carrying the filter's flag (filters add up)."""
        self._check()
        if not isinstance(event_type, EventTypeFilter):
            event_type = EventTypeFilter(EventFlag(event_type))
        self.event_type_filters.append(event_type)
        self._ok()

    def add_filter(self, monitor_filter: MonitorFilter) -> None:
        """Add a path filter."""
        self._check()
        self.filters.append(
            MonitorFilter(
                monitor_filter.text,
                monitor_filter.type,
                monitor_filter.case_sensitive,
                monitor_filter.extended,
            )
        )
        self._ok()

    # Life cycle

    def _create_monitor(self) -> None:
        if self.callback is None:
            self._fail(ErrorCode.CALLBACK_NOT_SET, "The callback has not been set.")
        if self._monitor is not None:
            self._fail(ErrorCode.MONITOR_ALREADY_EXISTS, "The session already contains a monitor.")
        if not self.paths:
            self._fail(ErrorCode.PATHS_NOT_SET, "The paths to watch have not been set.")

        context = _CallbackContext(self, self.callback, self.data)
        try:
            monitor = factory.create_monitor(
                self.monitor_type, list(self.paths), _callback_proxy, context
            )
        except FswError as error:
            set_last_error(error)
            raise
        if monitor is None:
            self._fail(ErrorCode.UNKNOWN_MONITOR_TYPE, "Unsupported monitor.")
        self._monitor = monitor

    def start(self) -> None:
        """Configure and run the monitor; returns once it has been stopped."""
        self._check()
        if self._monitor is None:
            self._create_monitor()
        monitor = self._monitor
        if monitor.is_running():
            self._fail(ErrorCode.MONITOR_ALREADY_RUNNING, "The monitor is already running.")

        monitor.allow_overflow = self.allow_overflow
        monitor.filters = list(self.filters)
        monitor.event_type_filters = list(self.event_type_filters)
        monitor.follow_symlinks = self.follow_symlinks
        if self.latency:
            monitor.latency = self.latency
        monitor.recursive = self.recursive
        monitor.directory_only = self.directory_only
        monitor.properties = dict(self.properties)

        try:
            monitor.start()
        except FswError as error:
            set_last_error(error)
            raise
        self._ok()

    def stop(self) -> None:
        """Ask the running monitor to stop; does nothing if it is not running."""
        self._check()
        if self._monitor is None:
            self._fail(ErrorCode.UNKNOWN_MONITOR_TYPE, "The session has no monitor.")
        if self._monitor.is_running():
            self._monitor.stop()
        self._ok()

    def is_running(self) -> bool:
        """Whether the session's monitor exists and is running."""
        self._check()
        return self._monitor is not None and self._monitor.is_running()

    def destroy(self) -> None:
        """Release the session; it cannot be used afterwards."""
        self._check()
        if self._monitor is not None:
            if self._monitor.is_running():
                self._fail(
                    ErrorCode.MONITOR_ALREADY_RUNNING, "The monitor is still running."
                )
            self._monitor.context = None
            self._monitor = None
        self._destroyed = True
        self._ok()