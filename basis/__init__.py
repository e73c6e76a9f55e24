"""Target resolution and command execution for build-system project scripts."""

from __future__ import annotations

__version__ = "0.1.0"

from basis.errors import (  # noqa: E402
    BasisError,
    MissingArgument,
    RegistryCollision,
    RegistryError,
    SubprocessFailure,
    UnresolvableTarget,
)
from basis.utilities import (  # noqa: E402
    execute,
    exedir,
    exename,
    exepath,
    istarget,
    qsplit,
    targetuid,
    tostring,
)

__all__ = [
    "__version__",
    "BasisError",
    "MissingArgument",
    "RegistryCollision",
    "RegistryError",
    "SubprocessFailure",
    "UnresolvableTarget",
    "execute",
    "exedir",
    "exename",
    "exepath",
    "istarget",
    "qsplit",
    "targetuid",
    "tostring",
]
