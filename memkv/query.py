"""Pure helpers that operate on a collection of entries already fetched from a store.

These never touch a store or its lock. Patterns are regular expressions
searched anywhere in the key, and the grouping helpers key their results on
the first capture group.
"""

from collections.abc import Iterable
import json
import re
from typing import Any

from .entry import Entry, sort_by_key
from .exceptions import DecodeError, PatternError
from .pattern import compile_regex

__all__ = [
    "group",
    "hash_values",
    "select",
    "take",
    "keys",
    "values",
    "json_object",
    "json_array",
    "join",
]


def _compile_grouping(pattern: str) -> re.Pattern[str]:
    regex = compile_regex(pattern)
    if regex.groups < 1:
        raise PatternError(pattern, "pattern has no capture group")
    return regex


def group(entries: Iterable[Entry], pattern: str) -> dict[str, list[Entry]]:
    """Partition entries by the first capture group of `pattern` on each key.

    Entries whose key does not match are dropped. The entries of each group
    are in key order.
    """
    regex = _compile_grouping(pattern)
    result: dict[str, list[Entry]] = {}
    for entry in entries:
        if (match := regex.search(entry.key)) is None:
            continue
        result.setdefault(match.group(1) or "", []).append(entry)
    return {name: sort_by_key(members) for name, members in result.items()}


def hash_values(entries: Iterable[Entry], pattern: str) -> dict[str, str]:
    """Map the first capture group of `pattern` to the value of each matching entry.

    When several entries produce the same group the last one wins.
    """
    regex = _compile_grouping(pattern)
    result: dict[str, str] = {}
    for entry in entries:
        if (match := regex.search(entry.key)) is not None:
            result[match.group(1) or ""] = entry.value
    return result


def select(entries: Iterable[Entry], pattern: str) -> list[Entry]:
    """Return the entries whose key matches `pattern`, in key order."""
    regex = compile_regex(pattern)
    return sort_by_key(entry for entry in entries if regex.search(entry.key))


def take(entries: Iterable[Entry], pattern: str) -> str:
    """Return the value of the first matching entry in iteration order, or `""`."""
    regex = compile_regex(pattern)
    for entry in entries:
        if regex.search(entry.key):
            return entry.value
    return ""


def keys(entries: Iterable[Entry]) -> list[str]:
    return [entry.key for entry in entries]


def values(entries: Iterable[Entry]) -> list[str]:
    return [entry.value for entry in entries]


def _decode(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as err:
        raise DecodeError(f"Unable to decode JSON: {err}") from err


def json_object(raw: str) -> dict[str, Any]:
    """Decode a raw string holding a JSON object."""
    data = _decode(raw)
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object but got {type(data).__name__}")
    return data


def json_array(raw: str) -> list[Any]:
    """Decode a raw string holding a JSON array."""
    data = _decode(raw)
    if not isinstance(data, list):
        raise DecodeError(f"Expected a JSON array but got {type(data).__name__}")
    return data


def join(*strs: str) -> str:
    """Concatenate the arguments with no separator."""
    return "".join(strs)
