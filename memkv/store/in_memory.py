"""Module for in memory key/value store."""

from collections import defaultdict
from collections.abc import Callable, Iterable
import logging
import re
import threading
from typing import DefaultDict

from memkv import paths
from memkv.entry import Entry, sort_by_key
from memkv.exceptions import KeyNotFoundError
from memkv.funcs import build_func_map
from memkv.pattern import compile_glob, compile_regex

from .lock import ReadWriteLock
from .store import Store, StoreEvent


_LOGGER = logging.getLogger(__name__)

Listener = Callable[[Entry], None]


class InMemoryStore(Store):
    """In-memory implementation of the Store interface.

    All entries live in a single dict guarded by a reader/writer lock. Queries
    hold shared access for their whole scan and mutations hold exclusive
    access. Listeners are invoked after the lock is released.
    """

    def __init__(self) -> None:
        """Initialize the InMemoryStore."""
        self._entries: dict[str, Entry] = {}
        self._lock = ReadWriteLock()
        self._listeners: DefaultDict[StoreEvent, list[Listener]] = defaultdict(list)
        self._listeners_lock = threading.Lock()
        self.func_map = build_func_map(self)

    def set(self, key: str, value: str) -> None:
        """Set the value of a key, replacing any existing entry."""
        if not key:
            raise ValueError("Key must be a non-empty string")
        entry = Entry(key, value)
        with self._lock.write():
            self._entries[key] = entry
            callbacks = self._callbacks(StoreEvent.KEY_SET)
        self._fire_event(StoreEvent.KEY_SET, callbacks, [entry])

    def get(self, key: str) -> Entry:
        """Return the entry for an exact key."""
        with self._lock.read():
            entry = self._entries.get(key)
        if entry is None:
            raise KeyNotFoundError(key)
        return entry

    def exists(self, key: str) -> bool:
        """Return True if an entry exists for the exact key."""
        with self._lock.read():
            return key in self._entries

    def get_value(self, key: str, default: str | None = None) -> str:
        """Return the value for an exact key, or a non-empty default."""
        try:
            return self.get(key).value
        except KeyNotFoundError:
            if default:
                return default
            raise

    def get_all(self, pattern: str) -> list[Entry]:
        """Return all entries whose key matches the glob pattern, in key order."""
        return self._find(compile_glob(pattern).fullmatch)

    def get_all_values(self, pattern: str) -> list[str]:
        """Return the values of all entries matching the glob pattern, sorted by value."""
        return sorted(entry.value for entry in self.get_all(pattern))

    def get_all_regexp(self, pattern: str) -> list[Entry]:
        """Return all entries whose key contains a match of the regex, in key order."""
        return self._find(compile_regex(pattern).search)

    def list_children(self, path: str) -> list[str]:
        """Return the names of the files and directories immediately below a path."""
        with self._lock.read():
            return paths.child_names(self._entries, path)

    def list_dir(self, path: str) -> list[str]:
        """Return the names of the directories immediately below a path."""
        with self._lock.read():
            return paths.child_names(self._entries, path, dirs_only=True)

    def delete(self, key: str) -> None:
        """Remove the entry for an exact key, doing nothing if it is absent."""
        with self._lock.write():
            entry = self._entries.pop(key, None)
            callbacks = self._callbacks(StoreEvent.KEY_DELETED)
        if entry is not None:
            self._fire_event(StoreEvent.KEY_DELETED, callbacks, [entry])

    def delete_all(self, pattern: str) -> int:
        """Remove all entries whose key matches the glob pattern."""
        return self._remove(compile_glob(pattern).fullmatch)

    def delete_all_regexp(self, pattern: str) -> int:
        """Remove all entries whose key contains a match of the regex."""
        return self._remove(compile_regex(pattern).search)

    def purge(self) -> None:
        """Remove all entries."""
        with self._lock.write():
            removed = list(self._entries.values())
            self._entries.clear()
            callbacks = self._callbacks(StoreEvent.KEY_DELETED)
        _LOGGER.debug("Purged %d entries from store", len(removed))
        self._fire_event(StoreEvent.KEY_DELETED, callbacks, removed)

    def __len__(self) -> int:
        """Return the number of entries in the store."""
        with self._lock.read():
            return len(self._entries)

    def __repr__(self) -> str:
        return f"InMemoryStore({len(self)} entries)"

    def _find(self, matcher: Callable[[str], re.Match[str] | None]) -> list[Entry]:
        with self._lock.read():
            found = [entry for entry in self._entries.values() if matcher(entry.key)]
        return sort_by_key(found)

    def _remove(self, matcher: Callable[[str], re.Match[str] | None]) -> int:
        # Matching and removal share one exclusive hold.
        with self._lock.write():
            removed = [
                entry for entry in self._entries.values() if matcher(entry.key)
            ]
            for entry in removed:
                del self._entries[entry.key]
            callbacks = self._callbacks(StoreEvent.KEY_DELETED)
        _LOGGER.debug("Removed %d entries from store", len(removed))
        self._fire_event(StoreEvent.KEY_DELETED, callbacks, sort_by_key(removed))
        return len(removed)

    def add_listener(
        self,
        event: StoreEvent,
        callback: Listener,
        flush: bool = False,
    ) -> Callable[[], None]:
        """Register a callback invoked with the affected entry for an event.

        With `flush`, existing entries are replayed to a `KEY_SET` callback.
        Registration and the replay snapshot happen under one read hold, so
        every entry is delivered exactly once, either replayed or live.
        """

        def remove() -> None:
            with self._listeners_lock:
                if callback in self._listeners[event]:
                    self._listeners[event].remove(callback)

        current: list[Entry] = []
        with self._lock.read():
            with self._listeners_lock:
                self._listeners[event].append(callback)
            if flush and event == StoreEvent.KEY_SET:
                current = sort_by_key(self._entries.values())

        if current:
            _LOGGER.debug("Flushing entries for event type %s", event)
            self._notify(event, callback, current)

        return remove

    def _callbacks(self, event: StoreEvent) -> list[Listener]:
        with self._listeners_lock:
            return list(self._listeners[event])

    def _fire_event(
        self, event: StoreEvent, callbacks: list[Listener], entries: Iterable[Entry]
    ) -> None:
        if not callbacks:
            return
        entries = list(entries)
        for cb in callbacks:
            self._notify(event, cb, entries)

    def _notify(
        self, event: StoreEvent, callback: Listener, entries: Iterable[Entry]
    ) -> None:
        for entry in entries:
            try:
                callback(entry)
            except Exception:
                _LOGGER.exception("Store listener callback failed for event %s", event)
