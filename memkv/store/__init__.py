"""
The store module provides a concurrency safe repository of key/value entries whose
slash delimited keys form an implicit directory tree.

- Keys are path like strings e.g. `/app/db/user`, values are opaque strings.
- Provides exact, glob, regex and directory listing queries.
- Provides a table of query functions for use by a template engine.

This abstract interface allows for various implementations (in-memory, indexed, etc.).
"""

from .store import Store, StoreEvent
from .in_memory import InMemoryStore
from .lock import ReadWriteLock

__all__ = [
    "Store",
    "StoreEvent",
    "InMemoryStore",
    "ReadWriteLock",
]
