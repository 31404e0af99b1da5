"""Library for compiling the glob and regular expression patterns used in queries.

Glob patterns follow shell rules applied to the whole key:

  - `*` matches any run of characters, including the `/` separator
  - `?` matches exactly one character
  - `[abc]`, `[a-z]` and `[^a-z]` match one character of a class
  - `\\` escapes the following character, inside or outside a class

A pattern is validated in full when it is compiled, so a malformed pattern
raises `PatternError` before any key is examined.
"""

from functools import lru_cache
import re

from .exceptions import PatternError

__all__ = [
    "compile_glob",
    "compile_regex",
    "match_glob",
]

_ESCAPE = "\\"


def _class_char(pattern: str, pos: int) -> tuple[str, int]:
    """Read a single, possibly escaped, character of a character class."""
    if pos >= len(pattern):
        raise PatternError(pattern, "unterminated character class")
    char = pattern[pos]
    if char in "-]":
        raise PatternError(pattern, f"unexpected '{char}' in character class")
    if char == _ESCAPE:
        pos += 1
        if pos >= len(pattern):
            raise PatternError(pattern, "trailing escape character")
        char = pattern[pos]
    return char, pos + 1


def _parse_class(pattern: str, pos: int) -> tuple[str, int]:
    """Translate the character class starting after `[` into a regex class."""
    negate = False
    if pos < len(pattern) and pattern[pos] == "^":
        negate = True
        pos += 1
    items: list[str] = []
    while True:
        if pos >= len(pattern):
            raise PatternError(pattern, "unterminated character class")
        if pattern[pos] == "]" and items:
            pos += 1
            break
        low, pos = _class_char(pattern, pos)
        if pos < len(pattern) and pattern[pos] == "-":
            high, pos = _class_char(pattern, pos + 1)
            if low > high:
                raise PatternError(pattern, f"invalid range '{low}-{high}'")
            items.append(f"{re.escape(low)}-{re.escape(high)}")
        else:
            items.append(re.escape(low))
    body = "".join(items)
    if negate:
        return f"[^{body}]", pos
    return f"[{body}]", pos


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a glob pattern into a regex that must match the entire key."""
    parts: list[str] = []
    pos = 0
    while pos < len(pattern):
        char = pattern[pos]
        pos += 1
        if char == "*":
            while pos < len(pattern) and pattern[pos] == "*":
                pos += 1
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        elif char == _ESCAPE:
            if pos >= len(pattern):
                raise PatternError(pattern, "trailing escape character")
            parts.append(re.escape(pattern[pos]))
            pos += 1
        elif char == "[":
            char_class, pos = _parse_class(pattern, pos)
            parts.append(char_class)
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


@lru_cache(maxsize=256)
def compile_regex(pattern: str) -> re.Pattern[str]:
    """Compile a regular expression, raising `PatternError` if it is malformed."""
    try:
        return re.compile(pattern)
    except re.error as err:
        raise PatternError(pattern, str(err)) from err


def match_glob(pattern: str, key: str) -> bool:
    """Return True if the key matches the glob pattern."""
    return compile_glob(pattern).fullmatch(key) is not None
