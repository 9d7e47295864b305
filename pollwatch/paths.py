"""Helpers for listing directories and statting paths."""

from __future__ import annotations

import os
import sys
from typing import List, Optional, Union

from pollwatch.logs import flogf, logf_perror

PathLike = Union[str, "os.PathLike[str]"]


def get_directory_entries(path: PathLike) -> List[os.DirEntry]:
    """Return the direct entries of the directory ``path``.

    Raises OSError if the directory cannot be opened; errors met while
    reading it are logged and the entries read so far are returned.
    """
    entries: List[os.DirEntry] = []
    with os.scandir(path) as iterator:
        try:
            for entry in iterator:
                entries.append(entry)
        except OSError as error:
            flogf(sys.stderr, "Error accessing directory: %s", error)
    return entries


def get_subdirectories(path: PathLike) -> List[os.DirEntry]:
    """Return the direct subdirectories of ``path``; errors are logged."""
    entries: List[os.DirEntry] = []
    try:
        with os.scandir(path) as iterator:
            for entry in iterator:
                if entry.is_dir():
                    entries.append(entry)
    except OSError as error:
        flogf(sys.stderr, "Error accessing directory: %s", error)
    return entries


def stat_path(path: PathLike, follow_symlink: bool = False) -> Optional[os.stat_result]:
    """Stat ``path``, or lstat it when ``follow_symlink`` is true.

    Returns None and logs the error if the call fails.
    """
    if follow_symlink:
        return lstat_path(path)
    try:
        return os.stat(path)
    except OSError:
        logf_perror("Cannot stat %s", os.fspath(path))
        return None


def lstat_path(path: PathLike) -> Optional[os.stat_result]:
    """Lstat ``path``; return None and log the error if the call fails."""
    if sys.platform == "win32":
        logf_perror("Cannot lstat %s (not implemented on Windows)", os.fspath(path))
        return None
    try:
        return os.lstat(path)
    except OSError:
        logf_perror("Cannot lstat %s", os.fspath(path))
        return None