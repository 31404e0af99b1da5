"""Table of store query functions exposed to a template engine by name."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from . import query

if TYPE_CHECKING:
    from .store import Store

__all__ = [
    "FUNC_NAMES",
    "build_func_map",
]


FUNC_NAMES = (
    "exists",
    "ls",
    "lsdir",
    "get",
    "gets",
    "getv",
    "getvs",
    "getrx",
    "group",
    "select",
    "hash",
    "take",
    "keys",
    "values",
    "object",
    "array",
    "join",
)


def build_func_map(store: "Store") -> dict[str, Callable[..., Any]]:
    """Return the template function table bound to a store instance."""
    return {
        "exists": store.exists,
        "ls": store.list_children,
        "lsdir": store.list_dir,
        "get": store.get,
        "gets": store.get_all,
        "getv": store.get_value,
        "getvs": store.get_all_values,
        "getrx": store.get_all_regexp,
        "group": query.group,
        "select": query.select,
        "hash": query.hash_values,
        "take": query.take,
        "keys": query.keys,
        "values": query.values,
        "object": query.json_object,
        "array": query.json_array,
        "join": query.join,
    }
