"""Store module for holding key/value entries and answering queries about them."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum
from typing import Any

from memkv.entry import Entry


class StoreEvent(str, Enum):
    """Enum for store events."""

    KEY_SET = "key_set"
    KEY_DELETED = "key_deleted"


class Store(ABC):
    """Abstract base class for a key/value store queried by hierarchical keys.

    Keys are slash delimited paths. Lookups that find nothing raise
    `KeyNotFoundError`, queries that match nothing return an empty list, and
    malformed patterns raise `PatternError`.
    """

    func_map: dict[str, Callable[..., Any]]
    """Query functions exposed to a template engine by name."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Set the value of a key, replacing any existing entry."""

    @abstractmethod
    def get(self, key: str) -> Entry:
        """Return the entry for an exact key.

        Raises:
            KeyNotFoundError: If the key is not in the store.
        """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True if an entry exists for the exact key."""

    @abstractmethod
    def get_value(self, key: str, default: str | None = None) -> str:
        """Return the value for an exact key.

        If the key is not in the store a non-empty `default` is returned
        instead.

        Raises:
            KeyNotFoundError: If the key is not in the store and no default
                was given.
        """

    @abstractmethod
    def get_all(self, pattern: str) -> list[Entry]:
        """Return all entries whose key matches the glob pattern, in key order."""

    @abstractmethod
    def get_all_values(self, pattern: str) -> list[str]:
        """Return the values of all entries matching the glob pattern, sorted by value."""

    @abstractmethod
    def get_all_regexp(self, pattern: str) -> list[Entry]:
        """Return all entries whose key contains a match of the regex, in key order."""

    @abstractmethod
    def list_children(self, path: str) -> list[str]:
        """Return the names of the files and directories immediately below a path."""

    @abstractmethod
    def list_dir(self, path: str) -> list[str]:
        """Return the names of the directories immediately below a path."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the entry for an exact key, doing nothing if it is absent."""

    @abstractmethod
    def delete_all(self, pattern: str) -> int:
        """Remove all entries whose key matches the glob pattern.

        Returns:
            The number of entries removed.
        """

    @abstractmethod
    def delete_all_regexp(self, pattern: str) -> int:
        """Remove all entries whose key contains a match of the regex.

        Returns:
            The number of entries removed.
        """

    @abstractmethod
    def purge(self) -> None:
        """Remove all entries."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of entries in the store."""

    @abstractmethod
    def add_listener(
        self,
        event: StoreEvent,
        callback: Callable[[Entry], None],
        flush: bool = False,
    ) -> Callable[[], None]:
        """Register a callback invoked with the affected entry for an event.

        When `flush` is set the callback is first invoked for every entry
        already in the store (only meaningful for `StoreEvent.KEY_SET`).

        Returns a callable that can be called to remove the listener.
        """
