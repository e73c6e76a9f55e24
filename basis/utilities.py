"""Helpers for scripts that are part of a project.

These functions mirror the utilities available to the project's scripts in
its other languages. They resolve names against the registry configured by
``BASIS_TARGETS``/``BASIS_NAMESPACE`` or, by default, the ``targets.yaml``
installed with this package.

Example::

    from basis.utilities import execute, exepath

    execute("tool", "--input", path, verbose=1)
    print(exepath("other-tool"))
"""

from __future__ import annotations

import sys
import threading
from typing import Iterable, NoReturn, Sequence

from basis.config import Settings
from basis.errors import BasisError, SubprocessFailure
from basis.executor import ExecConfig, Executor
from basis.exit_codes import EXIT_FAILURE
from basis.quoting import split_quoted, to_string
from basis.resolver import Resolver

_resolver: Resolver | None = None
_resolver_lock = threading.Lock()


def get_resolver() -> Resolver:
    """Return the resolver shared by the helpers in this module."""
    global _resolver
    if _resolver is None:
        with _resolver_lock:
            if _resolver is None:
                _resolver = Resolver.from_settings(Settings.from_env())
    return _resolver


def set_resolver(resolver: Resolver | None) -> None:
    """Replace the shared resolver; ``None`` reloads it from the environment on next use."""
    global _resolver
    with _resolver_lock:
        _resolver = resolver


def targetuid(name: str) -> str:
    return get_resolver().target_uid(name)


def istarget(name: str) -> bool:
    return get_resolver().is_target(name)


def exepath(name: str | None = None) -> str:
    """Absolute path of a build target or command, or of the running script.

    Raises:
        UnresolvableTarget: If the name cannot be resolved.
    """
    return get_resolver().exepath(name)


def exename(name: str | None = None) -> str:
    return get_resolver().exename(name)


def exedir(name: str | None = None) -> str:
    return get_resolver().exedir(name)


def tostring(args: Iterable[str]) -> str:
    return to_string(args)


def qsplit(text: str) -> list[str]:
    return split_quoted(text)


def _die(message: str) -> NoReturn:
    print(message, file=sys.stderr, flush=True)
    sys.exit(EXIT_FAILURE)


def execute(
    command: str | Sequence[str],
    *args: str,
    allow_fail: bool = False,
    verbose: int = 0,
    simulate: bool = False,
    quiet: bool = False,
) -> int:
    """Execute a build target or command and return its exit status.

    A command that cannot be resolved, or that fails while ``allow_fail`` is
    not set, terminates the calling script with exit status 1 and a message
    on standard error.
    """
    config = ExecConfig(allow_fail=allow_fail, verbose=verbose, simulate=simulate, quiet=quiet)
    try:
        return Executor(get_resolver(), config).execute(command, *args)
    except SubprocessFailure as exc:
        _die(str(exc))
    except BasisError as exc:
        _die(f"Error: {exc}")
