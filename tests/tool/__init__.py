"""Test helpers for memkv tools."""

import contextlib
import io

from memkv.tool.memkv import main


def run_command(args: list[str]) -> str:
    """Run the command line tool and return its output."""
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        main(args)
    return out.getvalue()
