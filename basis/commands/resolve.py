"""Resolve target names: uid, istarget, path, name, dir."""

from __future__ import annotations

import argparse
import sys

from basis.commands import resolver_from_args
from basis.errors import UnresolvableTarget
from basis.exit_codes import EXIT_FAILURE, EXIT_SUCCESS
from basis.types import CommandResult


def cmd_uid(args: argparse.Namespace) -> int | CommandResult:
    resolver = resolver_from_args(args)
    uid = resolver.target_uid(args.name)
    if getattr(args, "json", False):
        return CommandResult(
            exit_code=EXIT_SUCCESS,
            summary=uid,
            data={"name": args.name, "uid": uid, "is_target": resolver.is_target(args.name)},
        )
    print(uid)
    return EXIT_SUCCESS


def cmd_istarget(args: argparse.Namespace) -> int | CommandResult:
    resolver = resolver_from_args(args)
    found = resolver.is_target(args.name)
    exit_code = EXIT_SUCCESS if found else EXIT_FAILURE
    if getattr(args, "json", False):
        return CommandResult(
            exit_code=exit_code,
            summary=f"{args.name} is {'a' if found else 'not a'} build target",
            data={"name": args.name, "uid": resolver.target_uid(args.name), "is_target": found},
        )
    return exit_code


def cmd_path(args: argparse.Namespace) -> int | CommandResult:
    """Print the path, file name or directory of an executable.

    ``args.part`` selects which of the three is printed.
    """
    json_mode = getattr(args, "json", False)
    resolver = resolver_from_args(args)
    lookup = {
        "path": resolver.exepath,
        "name": resolver.exename,
        "dir": resolver.exedir,
    }[args.part]
    try:
        value = lookup(args.name)
    except UnresolvableTarget as exc:
        if json_mode:
            return CommandResult(
                exit_code=EXIT_FAILURE,
                summary=str(exc),
                problems=[{"severity": "error", "message": str(exc), "code": "BASIS-UNRESOLVABLE"}],
            )
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    if json_mode:
        return CommandResult(exit_code=EXIT_SUCCESS, summary=value, data={"name": args.name, args.part: value})
    print(value)
    return EXIT_SUCCESS
