"""memkv ls action."""

import logging
import pathlib
from argparse import (
    ArgumentParser,
    BooleanOptionalAction,
    _SubParsersAction as SubParsersAction,
)
from typing import cast

from . import get_common


_LOGGER = logging.getLogger(__name__)


class ListAction:
    """List the names immediately below a path."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "ls",
                help="List the files and directories below a path",
                description="Print the names immediately below a path, treating "
                "keys as a directory tree",
            ),
        )
        args.add_argument(
            "path", nargs="?", default="/", help="Directory path e.g. '/app'"
        )
        args.add_argument(
            "--dirs",
            default=False,
            action=BooleanOptionalAction,
            help="Only list names that have further keys beneath them",
        )
        get_common.add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        path: str,
        dirs: bool,
        files: list[pathlib.Path],
        prefix: str,
        output: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        store = get_common.load(files, prefix)
        if dirs:
            names = store.list_dir(path)
        else:
            names = store.list_children(path)
        _LOGGER.debug("Found %d names below %s", len(names), path)
        get_common.print_names(names, output)
