"""Representation of a single key/value entry held by the store.

Entries are immutable: a write to an existing key replaces the entry rather
than changing it in place.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from mashumaro import DataClassDictMixin
from mashumaro.codecs.yaml import yaml_decode, yaml_encode

__all__ = [
    "Entry",
    "sort_by_key",
    "sort_by_depth",
    "entries_to_dicts",
]

SEPARATOR = "/"


@dataclass(frozen=True, order=True)
class Entry(DataClassDictMixin):
    """A key and its value."""

    key: str
    """Slash delimited path of the entry e.g. `/app/db/user`."""

    value: str
    """Opaque value of the entry, may be empty."""

    @property
    def depth(self) -> int:
        """Number of path separators in the key."""
        return self.key.count(SEPARATOR)

    @classmethod
    def parse_yaml(cls, content: str) -> "Entry":
        """Parse a serialized entry."""
        return yaml_decode(content, cls)

    def yaml(self) -> str:
        """Return a YAML string representation of the entry."""
        return yaml_encode(self, self.__class__)  # type: ignore[return-value]

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


def _key_order(entry: Entry) -> str:
    return entry.key


def _depth_order(entry: Entry) -> tuple[int, str]:
    return (entry.depth, entry.key)


def sort_by_key(entries: Iterable[Entry]) -> list[Entry]:
    """Return the entries ordered lexicographically by key."""
    return sorted(entries, key=_key_order)


def sort_by_depth(entries: Iterable[Entry]) -> list[Entry]:
    """Return the entries ordered by key depth, then lexicographically by key.

    Parents sort before their children.
    """
    return sorted(entries, key=_depth_order)


def entries_to_dicts(entries: Iterable[Entry]) -> list[dict[str, Any]]:
    """Serialize entries for output formatters."""
    return [entry.to_dict() for entry in entries]
