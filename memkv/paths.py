"""Helpers for treating slash delimited keys as an implicit directory tree.

There is no tree structure behind the store. Listing operations compare keys
segment by segment on every query, so `/a/b` is a parent of `/a/b/c` but not
of `/a/bc`.
"""

from collections.abc import Iterable
import posixpath

__all__ = [
    "clean",
    "split",
    "base",
    "child_names",
]

SEPARATOR = "/"


def clean(path: str) -> str:
    """Return the normalized form of a path.

    Repeated and trailing separators and `.` segments are removed. The empty
    path is the root.
    """
    if not path:
        return SEPARATOR
    cleaned = posixpath.normpath(path)
    if cleaned.startswith(SEPARATOR * 2):
        # normpath keeps exactly two leading slashes
        cleaned = SEPARATOR + cleaned.lstrip(SEPARATOR)
    return cleaned


def split(path: str) -> list[str]:
    """Split a normalized path into segments, the root being `[""]`."""
    cleaned = clean(path)
    if cleaned == SEPARATOR:
        return [""]
    return cleaned.split(SEPARATOR)


def base(path: str) -> str:
    """Return the last segment of a path."""
    cleaned = clean(path)
    if cleaned == SEPARATOR:
        return SEPARATOR
    return posixpath.basename(cleaned)


def child_names(keys: Iterable[str], path: str, dirs_only: bool = False) -> list[str]:
    """Return the sorted names found immediately below `path`.

    Each key strictly below `path` contributes the first segment after it, with
    any deeper structure collapsed into that name. A key equal to `path`
    contributes its own base name. When `dirs_only` is set, only names that
    have at least one more segment beneath them are returned and a key equal
    to `path` contributes nothing.
    """
    prefix = split(path)
    size = len(prefix)
    names: set[str] = set()
    for key in keys:
        terms = split(key)
        if terms == prefix:
            if not dirs_only:
                names.add(base(key))
            continue
        depth = len(terms) - size
        if depth < 1 or terms[:size] != prefix:
            continue
        if dirs_only and depth < 2:
            continue
        names.add(terms[size])
    return sorted(names)
