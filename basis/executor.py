"""Execution of a single command with verbosity, dry-run and fail-fast handling."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Sequence

from basis.errors import MissingArgument, SubprocessFailure
from basis.quoting import split_quoted, to_string
from basis.resolver import Resolver

logger = logging.getLogger(__name__)

EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126


@dataclass(frozen=True)
class ExecConfig:
    """Options of :meth:`Executor.execute`.

    Attributes:
        allow_fail: Return a non-zero exit status instead of raising.
        verbose: Print the command line before running it if greater than 0.
        simulate: Print the command line and return 0 without running it.
        quiet: Discard the standard output of the command.
    """

    allow_fail: bool = False
    verbose: int = 0
    simulate: bool = False
    quiet: bool = False


def normalize_command(command: str | Sequence[str], args: Sequence[str] = ()) -> list[str]:
    """Turn the accepted command forms into one argument list.

    ``command`` is either a sequence ``[program, *args]``, a program name
    followed by ``args``, or (without ``args``) a whole command line that is
    split with :func:`basis.quoting.split_quoted`.

    Raises:
        MissingArgument: If no program is given or the command line has an
            unterminated quote.
    """
    if isinstance(command, str):
        try:
            argv = [command, *args] if args else split_quoted(command)
        except ValueError as exc:
            raise MissingArgument(str(exc)) from exc
    else:
        argv = [*command, *args]
    if not argv or not argv[0]:
        raise MissingArgument("No command specified")
    return [str(arg) for arg in argv]


class Executor:
    """Run commands whose program is resolved through a :class:`Resolver`."""

    def __init__(self, resolver: Resolver, config: ExecConfig | None = None) -> None:
        self.resolver = resolver
        self.config = config or ExecConfig()

    def execute(self, command: str | Sequence[str], *args: str) -> int:
        """Run a command and wait for it to finish.

        The program is resolved as a build target or a command on the PATH.
        The child inherits the standard streams of this process.

        Returns:
            The exit status of the command, or 0 in simulate mode.

        Raises:
            MissingArgument: If no command is given.
            UnresolvableTarget: If the program cannot be resolved.
            SubprocessFailure: If the command fails and ``allow_fail`` is not set.
        """
        config = self.config
        argv = normalize_command(command, args)
        argv[0] = self.resolver.exepath(argv[0])
        cmdline = to_string(argv)

        if config.verbose > 0 or config.simulate:
            print(cmdline, flush=True)
        if config.simulate:
            return 0

        logger.debug("Running %s", cmdline)
        try:
            proc = subprocess.run(  # noqa: S603
                argv,
                stdout=subprocess.DEVNULL if config.quiet else None,
                check=False,
            )
            status = proc.returncode
        except FileNotFoundError as exc:
            logger.debug("Failed to start %s: %s", argv[0], exc)
            status = EXIT_NOT_FOUND
        except OSError as exc:
            logger.debug("Failed to start %s: %s", argv[0], exc)
            status = EXIT_NOT_EXECUTABLE

        if status != 0 and not config.allow_fail:
            raise SubprocessFailure(cmdline, status)
        return status
