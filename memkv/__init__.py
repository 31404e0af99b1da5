"""
memkv is an in-memory key/value store for hierarchical, slash delimited keys.

The store answers exact, glob, regex and directory listing queries and exposes
them as a table of named functions for a template engine.
"""

__all__ = [
    "config",
    "entry",
    "exceptions",
    "funcs",
    "paths",
    "pattern",
    "query",
    "store",
    "loader",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
