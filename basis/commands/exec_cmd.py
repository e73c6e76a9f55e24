"""Execute a build target or command."""

from __future__ import annotations

import argparse
import contextlib
import sys

from basis.commands import resolver_from_args
from basis.errors import MissingArgument, SubprocessFailure, UnresolvableTarget
from basis.executor import ExecConfig, Executor
from basis.exit_codes import EXIT_FAILURE, EXIT_USAGE
from basis.types import CommandResult


def cmd_exec(args: argparse.Namespace) -> int | CommandResult:
    json_mode = getattr(args, "json", False)
    argv = list(args.cmd or [])
    if argv and argv[0] == "--":
        argv = argv[1:]
    config = ExecConfig(
        allow_fail=bool(args.allow_fail),
        verbose=int(args.verbose or 0),
        simulate=bool(args.simulate),
        quiet=bool(args.quiet) or json_mode,
    )
    executor = Executor(resolver_from_args(args), config)

    # In JSON mode stdout carries only the payload; the command echo goes to stderr.
    echo_target = sys.stderr if json_mode else sys.stdout
    try:
        with contextlib.redirect_stdout(echo_target):
            status = executor.execute(argv)
    except MissingArgument as exc:
        message = str(exc)
        exit_code = EXIT_USAGE
    except SubprocessFailure as exc:
        message = str(exc)
        exit_code = EXIT_FAILURE
    except UnresolvableTarget as exc:
        message = f"Error: {exc}"
        exit_code = EXIT_FAILURE
    else:
        summary = "Simulated" if config.simulate else f"Exit status {status}"
        if json_mode:
            return CommandResult(exit_code=status, summary=summary, data={"status": status})
        return status

    if json_mode:
        return CommandResult(
            exit_code=exit_code,
            summary=message,
            problems=[{"severity": "error", "message": message, "code": "BASIS-EXEC"}],
        )
    print(message, file=sys.stderr)
    return exit_code

