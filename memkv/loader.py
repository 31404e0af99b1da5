"""Library for populating a store from YAML documents.

Nested mappings are flattened into slash delimited keys, for example:

    app:
      db:
        user: admin
      hosts:
        - a.example.com
        - b.example.com

becomes `/app/db/user=admin`, `/app/hosts/0=a.example.com` and
`/app/hosts/1=b.example.com`.
"""

from collections.abc import Iterable
import logging
from pathlib import Path
from typing import Any

import yaml

from .config import LoadConfig
from .exceptions import InputException
from .paths import SEPARATOR, clean
from .store import Store

__all__ = [
    "flatten",
    "read_source",
    "load_store",
]

_LOGGER = logging.getLogger(__name__)


def _scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _join(prefix: str, name: Any) -> str:
    if prefix.endswith(SEPARATOR):
        return f"{prefix}{name}"
    return f"{prefix}{SEPARATOR}{name}"


def flatten(data: Any, prefix: str = SEPARATOR) -> dict[str, str]:
    """Flatten nested mappings and lists into a dict of slash delimited keys."""
    result: dict[str, str] = {}
    if isinstance(data, dict):
        for name, child in data.items():
            result.update(flatten(child, _join(prefix, name)))
    elif isinstance(data, list):
        for index, child in enumerate(data):
            result.update(flatten(child, _join(prefix, index)))
    else:
        result[prefix] = _scalar(data)
    return result


def read_source(path: Path, config: LoadConfig | None = None) -> dict[str, str]:
    """Read a YAML file and return its flattened keys."""
    config = config or LoadConfig()
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise InputException(f"Unable to read source file {path}: {err}") from err
    try:
        doc = yaml.safe_load(content)
    except yaml.YAMLError as err:
        raise InputException(f"Unable to parse YAML source {path}: {err}") from err
    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise InputException(
            f"Expected a mapping at the top of {path} but got {type(doc).__name__}"
        )
    return flatten(doc, clean(config.prefix))


def load_store(
    store: Store, sources: Iterable[Path], config: LoadConfig | None = None
) -> int:
    """Set the flattened keys of each source in the store.

    Keys from later sources replace keys from earlier ones.

    Returns:
        The number of keys set.
    """
    count = 0
    for source in sources:
        data = read_source(source, config)
        _LOGGER.debug("Loading %d keys from %s", len(data), source)
        for key, value in data.items():
            store.set(key, value)
        count += len(data)
    return count
