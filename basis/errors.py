"""Error types raised by target resolution and command execution."""

from __future__ import annotations


class BasisError(RuntimeError):
    """Base class for errors raised by the basis utilities."""


class MissingArgument(BasisError, ValueError):
    """Raised when a helper is called without a required argument."""


class UnresolvableTarget(BasisError, LookupError):
    """Raised when a name is neither a registered target nor found on the PATH."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name!r} is neither a known build target nor an executable on the PATH")
        self.name = name


class SubprocessFailure(BasisError):
    """Raised when an executed command exits with a non-zero status."""

    def __init__(self, cmdline: str, returncode: int) -> None:
        super().__init__(f"Command {cmdline} failed")
        self.cmdline = cmdline
        self.returncode = returncode


class RegistryError(BasisError):
    """Raised when the target registry data cannot be loaded."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class RegistryCollision(RegistryError):
    """Raised when two target names map to the same registry key."""

    def __init__(self, key: str, names: tuple[str, str]) -> None:
        super().__init__(f"targets {names[0]!r} and {names[1]!r} both map to registry key {key!r}")
        self.key = key
        self.names = names
