"""Library initialisation and the per-thread record of the last status."""

from __future__ import annotations

import threading
from typing import Union

from pollwatch.errors import ErrorCode, FswError

_state = threading.local()


def init_library() -> ErrorCode:
    """Prepare the library for use; returns ErrorCode.OK on success."""
    _state.last_error = ErrorCode.OK
    return ErrorCode.OK


def set_last_error(error: Union[int, ErrorCode, FswError]) -> ErrorCode:
    """Record ``error`` as the calling thread's last status and return it.

    An FswError is recorded by its code. Raises ValueError if the value
    is not a known status code.
    """
    code = error.code if isinstance(error, FswError) else ErrorCode(int(error))
    _state.last_error = code
    return code


def last_error() -> ErrorCode:
    """The last status recorded by the calling thread; OK if none was."""
    return getattr(_state, "last_error", ErrorCode.OK)