"""Exceptions related to memkv."""

__all__ = [
    "MemkvException",
    "InputException",
    "KeyNotFoundError",
    "PatternError",
    "DecodeError",
]


class MemkvException(Exception):
    """Generic base exception used for this library."""


class InputException(MemkvException):
    """Raised when the input files or values are not formatted as expected."""


class KeyNotFoundError(MemkvException):
    """Raised when an exact key lookup finds no entry in the store."""

    def __init__(self, key: str) -> None:
        super().__init__(f"key does not exist: {key}")
        self.key = key


class PatternError(MemkvException):
    """Raised when a glob or regular expression pattern is malformed."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class DecodeError(MemkvException):
    """Raised when a raw string is not the expected JSON document."""
