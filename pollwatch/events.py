"""Change events, their flags, monitor types and filter descriptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Tuple

from pollwatch.errors import ErrorCode, FswError


class EventFlag(IntEnum):
    """Backend-agnostic change flags; every value is a power of two."""

    NoOp = 0
    PlatformSpecific = 1 << 0
    Created = 1 << 1
    Updated = 1 << 2
    Removed = 1 << 3
    Renamed = 1 << 4
    OwnerModified = 1 << 5
    AttributeModified = 1 << 6
    MovedFrom = 1 << 7
    MovedTo = 1 << 8
    IsFile = 1 << 9
    IsDir = 1 << 10
    IsSymLink = 1 << 11
    Link = 1 << 12
    Overflow = 1 << 13
    CloseWrite = 1 << 14


ALL_EVENT_FLAGS: Tuple[EventFlag, ...] = tuple(EventFlag)


class MonitorType(IntEnum):
    """Available monitor kinds; SYSTEM_DEFAULT picks the platform default."""

    SYSTEM_DEFAULT = 0
    FSEVENTS = 1
    KQUEUE = 2
    INOTIFY = 3
    WINDOWS = 4
    POLL = 5
    FEN = 6


class FilterType(IntEnum):
    """Whether a path filter includes or excludes matching paths."""

    INCLUDE = 0
    EXCLUDE = 1


@dataclass(frozen=True)
class MonitorFilter:
    """A regular-expression path filter."""

    text: str
    type: FilterType = FilterType.INCLUDE
    case_sensitive: bool = True
    extended: bool = False


@dataclass(frozen=True)
class EventTypeFilter:
    """Accepts events carrying the given flag."""

    flag: EventFlag


@dataclass(frozen=True)
class Event:
    """A change observed at a path at a given time."""

    path: str
    time: float
    flags: Tuple[EventFlag, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", tuple(EventFlag(f) for f in self.flags))

    @property
    def mask(self) -> int:
        """All flags of the event combined into one bit mask."""
        result = 0
        for flag in self.flags:
            result |= flag
        return result

    def has(self, flag: EventFlag) -> bool:
        """Whether the event carries ``flag``."""
        return flag in self.flags


def event_flag_by_name(name: str) -> EventFlag:
    """Return the flag called ``name``; raise FswError if there is none."""
    try:
        return EventFlag[name]
    except KeyError:
        raise FswError(f"Unknown event type: {name}", ErrorCode.UNKNOWN_VALUE) from None


def event_flag_name(flag: int) -> str:
    """Return the name of ``flag``; raise FswError if it is not a known flag."""
    try:
        return EventFlag(flag).name
    except ValueError:
        raise FswError(f"Unknown event type: {flag}", ErrorCode.UNKNOWN_VALUE) from None


def flags_from_names(names: Iterable[str]) -> Tuple[EventFlag, ...]:
    """Resolve several flag names at once."""
    return tuple(event_flag_by_name(n) for n in names)