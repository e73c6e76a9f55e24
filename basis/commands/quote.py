"""Quote argument lists and split quoted command lines."""

from __future__ import annotations

import argparse
import json
import sys

from basis.exit_codes import EXIT_SUCCESS, EXIT_USAGE
from basis.quoting import split_quoted, to_string
from basis.types import CommandResult


def cmd_quote(args: argparse.Namespace) -> int | CommandResult:
    cmdline = to_string(args.args)
    if getattr(args, "json", False):
        return CommandResult(exit_code=EXIT_SUCCESS, summary=cmdline, data={"cmdline": cmdline})
    print(cmdline)
    return EXIT_SUCCESS


def cmd_split(args: argparse.Namespace) -> int | CommandResult:
    json_mode = getattr(args, "json", False)
    try:
        parts = split_quoted(args.cmdline)
    except ValueError as exc:
        if json_mode:
            return CommandResult(exit_code=EXIT_USAGE, summary=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_USAGE
    if json_mode:
        return CommandResult(exit_code=EXIT_SUCCESS, summary=f"{len(parts)} arguments", data={"args": parts})
    print(json.dumps(parts))
    return EXIT_SUCCESS
