"""memkv get action."""

import logging
import pathlib
from argparse import (
    ArgumentParser,
    _SubParsersAction as SubParsersAction,
)
from typing import cast

from . import get_common


_LOGGER = logging.getLogger(__name__)


class GetKeyAction:
    """Get the entry for an exact key."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "key",
                help="Get the entry for an exact key",
                description="Print the entry stored at an exact key",
            ),
        )
        args.add_argument("key", help="Exact key to look up")
        get_common.add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        key: str,
        files: list[pathlib.Path],
        prefix: str,
        output: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        store = get_common.load(files, prefix)
        get_common.print_entries([store.get(key)], output)


class GetValueAction:
    """Get the value for an exact key."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "value",
                help="Get the value for an exact key",
                description="Print the value stored at an exact key",
            ),
        )
        args.add_argument("key", help="Exact key to look up")
        args.add_argument(
            "--default",
            default=None,
            help="Value to print when the key does not exist",
        )
        get_common.add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        key: str,
        default: str | None,
        files: list[pathlib.Path],
        prefix: str,
        output: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        store = get_common.load(files, prefix)
        get_common.print_names([store.get_value(key, default)], output)


class GetGlobAction:
    """Get all entries matching a glob pattern."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "glob",
                aliases=["gets"],
                help="Get all entries whose key matches a glob pattern",
                description="Print all entries whose key matches a glob pattern "
                "where '*' also matches '/'",
            ),
        )
        args.add_argument("pattern", help="Glob pattern e.g. '/app/db/*'")
        get_common.add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        pattern: str,
        files: list[pathlib.Path],
        prefix: str,
        output: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        store = get_common.load(files, prefix)
        entries = store.get_all(pattern)
        _LOGGER.debug("Found %d entries matching glob %s", len(entries), pattern)
        get_common.print_entries(entries, output)


class GetValuesAction:
    """Get the values of all entries matching a glob pattern."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "values",
                aliases=["getvs"],
                help="Get the sorted values of all entries matching a glob pattern",
                description="Print the values of all entries whose key matches a "
                "glob pattern, sorted by value",
            ),
        )
        args.add_argument("pattern", help="Glob pattern e.g. '/app/db/*'")
        get_common.add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        pattern: str,
        files: list[pathlib.Path],
        prefix: str,
        output: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        store = get_common.load(files, prefix)
        get_common.print_names(store.get_all_values(pattern), output)


class GetRegexAction:
    """Get all entries matching a regular expression."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "regex",
                aliases=["getrx"],
                help="Get all entries whose key contains a regex match",
                description="Print all entries whose key contains a match of a "
                "regular expression",
            ),
        )
        args.add_argument("pattern", help="Regular expression e.g. '^/app/.*/user$'")
        get_common.add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        pattern: str,
        files: list[pathlib.Path],
        prefix: str,
        output: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        store = get_common.load(files, prefix)
        entries = store.get_all_regexp(pattern)
        _LOGGER.debug("Found %d entries matching regex %s", len(entries), pattern)
        get_common.print_entries(entries, output)


class GetAction:
    """memkv get action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "get",
                help="Print entries or values from a store",
                description="Print entries or values from a store loaded from "
                "YAML source files",
            ),
        )
        subcmds = args.add_subparsers(
            title="Available commands",
            required=True,
        )
        GetKeyAction.register(subcmds)
        GetValueAction.register(subcmds)
        GetGlobAction.register(subcmds)
        GetValuesAction.register(subcmds)
        GetRegexAction.register(subcmds)
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        # No-op given subcommands are always the dispatch target
