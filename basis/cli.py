"""Command line interface for resolving and executing project targets."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time

from basis import __version__
from basis.commands.exec_cmd import cmd_exec
from basis.commands.quote import cmd_quote, cmd_split
from basis.commands.resolve import cmd_istarget, cmd_path, cmd_uid
from basis.commands.targets import cmd_targets
from basis.errors import BasisError, RegistryError
from basis.exit_codes import EXIT_FAILURE, EXIT_INTERNAL_ERROR, EXIT_SUCCESS
from basis.types import CommandResult

LOG_LEVELS = ["debug", "info", "warning", "error"]


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", help="Emit a JSON result on stdout")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="basis",
        description="Resolve build target names and execute project commands",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--targets",
        help="Target registry file (default: $BASIS_TARGETS or the installed targets.yaml)",
    )
    parser.add_argument("--namespace", help="Namespace of the calling project (default: $BASIS_NAMESPACE)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="warning", help="Logging level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    uid = subparsers.add_parser("uid", help="Print the UID a target name resolves to")
    add_json_flag(uid)
    uid.add_argument("name", help="Target name")
    uid.set_defaults(func=cmd_uid)

    istarget = subparsers.add_parser("istarget", help="Exit 0 if the name is a known build target")
    add_json_flag(istarget)
    istarget.add_argument("name", help="Target name")
    istarget.set_defaults(func=cmd_istarget)

    for part, help_text in (
        ("path", "Print the absolute path of an executable"),
        ("name", "Print the file name of an executable"),
        ("dir", "Print the directory of an executable"),
    ):
        sub = subparsers.add_parser(part, help=help_text)
        add_json_flag(sub)
        sub.add_argument("name", nargs="?", help="Target or command name (default: this program)")
        sub.set_defaults(func=cmd_path, part=part)

    exec_parser = subparsers.add_parser("exec", help="Execute a build target or command")
    add_json_flag(exec_parser)
    exec_parser.add_argument(
        "--allow-fail",
        action="store_true",
        help="Return the exit status of a failing command instead of failing",
    )
    exec_parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Print the command line before executing it",
    )
    exec_parser.add_argument(
        "--simulate",
        action="store_true",
        help="Print the command line without executing it",
    )
    exec_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Discard the command's standard output (implied by --json)",
    )
    exec_parser.add_argument("cmd", nargs=argparse.REMAINDER, help="Command and arguments")
    exec_parser.set_defaults(func=cmd_exec)

    targets = subparsers.add_parser("targets", help="List the registered build targets")
    add_json_flag(targets)
    targets.set_defaults(func=cmd_targets)

    quote = subparsers.add_parser("quote", help="Join arguments into a quoted command line")
    add_json_flag(quote)
    quote.add_argument("args", nargs="*", help="Arguments")
    quote.set_defaults(func=cmd_quote)

    split = subparsers.add_parser("split", help="Split a quoted command line into arguments")
    add_json_flag(split)
    split.add_argument("cmdline", help="Command line")
    split.set_defaults(func=cmd_split)

    return parser


def _error_result(exc: Exception, exit_code: int, code: str) -> CommandResult:
    problems = [{"severity": "error", "message": str(exc), "code": code}]
    if isinstance(exc, RegistryError):
        problems.extend({"severity": "error", "message": message, "code": code} for message in exc.errors)
    return CommandResult(exit_code=exit_code, summary=str(exc), problems=problems)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )
    start = time.perf_counter()
    command = args.command
    json_mode = getattr(args, "json", False)

    try:
        result = args.func(args)
    except BasisError as exc:
        result = _error_result(exc, EXIT_FAILURE, "BASIS-ERROR")
        if not json_mode:
            print(f"Error: {exc}", file=sys.stderr)
            for message in result.problems[1:]:
                print(f"  - {message['message']}", file=sys.stderr)
            return EXIT_FAILURE
    except Exception as exc:  # noqa: BLE001 - surface in JSON mode
        if json_mode:
            payload = _error_result(exc, EXIT_INTERNAL_ERROR, "BASIS-UNHANDLED").to_payload(
                command,
                "error",
                int((time.perf_counter() - start) * 1000),
            )
            print(json.dumps(payload, indent=2))
            return EXIT_INTERNAL_ERROR
        raise

    if isinstance(result, CommandResult):
        exit_code = result.exit_code
        command_result = result
    else:
        exit_code = int(result)
        command_result = CommandResult(exit_code=exit_code)

    if not command_result.summary:
        command_result.summary = "OK" if exit_code == EXIT_SUCCESS else "Command failed"

    if json_mode:
        status = "success" if exit_code == EXIT_SUCCESS else "failure"
        payload = command_result.to_payload(
            command,
            status,
            int((time.perf_counter() - start) * 1000),
        )
        print(json.dumps(payload, indent=2))
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
