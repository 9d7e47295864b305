"""Verbose-mode diagnostics and printf-style message formatting."""

from __future__ import annotations

import sys
from typing import Any, TextIO

_verbose = False


def is_verbose() -> bool:
    """Whether verbose logging is active."""
    return _verbose


def set_verbose(verbose: bool) -> None:
    """Turn verbose logging on or off."""
    global _verbose
    _verbose = bool(verbose)


def string_from_format(fmt: str, *args: Any) -> str:
    """Format ``args`` with the printf-style format ``fmt``."""
    return fmt % args


def log(msg: str) -> None:
    """Print ``msg`` to standard output when verbose."""
    if _verbose:
        sys.stdout.write(msg)


def flog(stream: TextIO, msg: str) -> None:
    """Print ``msg`` to ``stream`` when verbose."""
    if _verbose:
        stream.write(msg)


def logf(fmt: str, *args: Any) -> None:
    """Format the message and print it to standard output when verbose."""
    if _verbose:
        sys.stdout.write(string_from_format(fmt, *args))


def flogf(stream: TextIO, fmt: str, *args: Any) -> None:
    """Format the message and print it to ``stream`` when verbose."""
    if _verbose:
        stream.write(string_from_format(fmt, *args))


def _describe_current_error() -> str | None:
    error = sys.exc_info()[1]
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    if error is not None:
        return str(error) or type(error).__name__
    return None


def log_perror(msg: str) -> None:
    """Print ``msg`` and the error being handled to standard error when verbose.

    The error description is taken from the exception currently being
    handled, if any, and appended after a colon.
    """
    if not _verbose:
        return
    description = _describe_current_error()
    text = f"{msg}: {description}" if description else msg
    sys.stderr.write(text + "\n")


def logf_perror(fmt: str, *args: Any) -> None:
    """Format the message and report it like :func:`log_perror`."""
    if _verbose:
        log_perror(string_from_format(fmt, *args))