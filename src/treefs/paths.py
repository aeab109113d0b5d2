"""Normalisation of entry paths and the root-escape check."""

import posixpath
from pathlib import PurePosixPath, PureWindowsPath
from typing import Tuple

from treefs.exceptions import PathSafetyError


def normalize_entry_path(path: str) -> str:
    """Normalise an entry path and make sure it stays inside the tree root.

    Backslashes are treated as separators, redundant separators and ``.`` segments are
    collapsed, and ``..`` segments are resolved lexically. The root itself normalises
    to the empty string.

    Args:
        path: The path as written in the entry.

    Returns:
        The normalised, slash-separated relative path.

    Raises:
        PathSafetyError: If the path contains a NUL byte, is absolute, carries a
            drive, or resolves outside the root.

    Example:
        >>> normalize_entry_path("a/./b//c.txt")
        'a/b/c.txt'
        >>> normalize_entry_path("a/../b.txt")
        'b.txt'
        >>> normalize_entry_path("a/..")
        ''
    """
    if "\0" in path:
        raise PathSafetyError(path, "path contains a NUL byte")

    candidate = path.replace("\\", "/")
    if PurePosixPath(candidate).is_absolute() or PureWindowsPath(path).anchor:
        raise PathSafetyError(path, "absolute paths are not allowed")

    normalized = posixpath.normpath(candidate) if candidate else "."
    if normalized == ".." or normalized.startswith("../"):
        raise PathSafetyError(path, "path escapes the tree root")
    return "" if normalized == "." else normalized


def ancestors(normalized: str) -> Tuple[str, ...]:
    """Return the proper ancestors of a normalised path, outermost first.

    Example:
        >>> ancestors("a/b/c.txt")
        ('a', 'a/b')
        >>> ancestors("top.txt")
        ()
    """
    parts = normalized.split("/") if normalized else []
    return tuple("/".join(parts[:i]) for i in range(1, len(parts)))
