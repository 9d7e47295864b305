"""Creation and discovery of monitors by type or by name."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union

from pollwatch.errors import ErrorCode, FswError
from pollwatch.events import MonitorType
from pollwatch.poll import EventCallback, PollMonitor

_DEFAULT_TYPE = MonitorType.POLL

_TYPES_BY_NAME: Dict[str, MonitorType] = {
    "poll_monitor": MonitorType.POLL,
}


def create_monitor(
    kind: Union[MonitorType, str],
    paths: Sequence[str],
    callback: EventCallback,
    context: Any = None,
) -> Optional[PollMonitor]:
    """Create a monitor of the given type or type name.

    A type name that is not registered gives None; a monitor type that is
    not available raises FswError.
    """
    if isinstance(kind, str):
        found = _TYPES_BY_NAME.get(kind)
        if found is None:
            return None
        kind = found

    if kind == MonitorType.SYSTEM_DEFAULT:
        kind = _DEFAULT_TYPE

    if kind == MonitorType.POLL:
        return PollMonitor(paths, callback, context)

    raise FswError("Unsupported monitor.", ErrorCode.UNKNOWN_MONITOR_TYPE)


def exists_type(name: str) -> bool:
    """Whether a monitor type called ``name`` is available."""
    return name in _TYPES_BY_NAME


def get_types() -> List[str]:
    """Names of the available monitor types, in sorted order."""
    return sorted(_TYPES_BY_NAME)