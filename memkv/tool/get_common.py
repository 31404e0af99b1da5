"""Common utilities for query commands."""

import logging
import pathlib
from argparse import ArgumentParser

from memkv import loader
from memkv.config import LoadConfig
from memkv.entry import Entry, entries_to_dicts
from memkv.store import InMemoryStore

from .format import FORMATTERS, make_formatter

_LOGGER = logging.getLogger(__name__)


def add_common_flags(args: ArgumentParser) -> None:
    """Add common flags to the arguments object."""
    args.add_argument(
        "--file",
        "-f",
        dest="files",
        type=pathlib.Path,
        action="append",
        required=True,
        help="YAML source file to load into the store; may be repeated, later "
        "files override earlier ones",
    )
    args.add_argument(
        "--prefix",
        default="/",
        help="Path under which the keys of the source files are placed",
    )
    args.add_argument(
        "--output",
        "-o",
        choices=list(FORMATTERS),
        default="table",
        help="Output format of the command",
    )


def load(files: list[pathlib.Path], prefix: str) -> InMemoryStore:
    """Build a store from the source files."""
    store = InMemoryStore()
    count = loader.load_store(store, files, LoadConfig(prefix=prefix))
    _LOGGER.debug("Loaded %d keys into store", count)
    return store


def print_entries(entries: list[Entry], output: str) -> None:
    """Print entries in the requested output format."""
    make_formatter(output).print(entries_to_dicts(entries))


def print_names(names: list[str], output: str) -> None:
    """Print a list of names or values in the requested output format."""
    make_formatter(output).print(names)
