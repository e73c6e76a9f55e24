"""Resolution of target names to executable paths.

A script refers to the executables built by its project by target name. The
name is looked up in the project namespace first, then in each enclosing
namespace, and finally treated as a plain command on the PATH.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys

from basis.config import Settings
from basis.errors import UnresolvableTarget
from basis.registry import Registry, default_registry

logger = logging.getLogger(__name__)

NAMESPACE_SEPARATOR = "."


def resolve_uid(name: str, namespace: str, registry: Registry) -> str:
    """Resolve a target name to the UID of a registered target.

    Names that start with the namespace separator are taken as fully
    qualified and returned unchanged. Otherwise the name is tried within
    ``namespace`` and then within each enclosing namespace, innermost first.

    Args:
        name: Target name as given by the caller.
        namespace: Dot-separated namespace of the calling project.
        registry: Registered targets.

    Returns:
        The UID of the first registered match, or ``name`` unchanged if no
        namespace level has a target of that name.
    """
    if not name or name.startswith(NAMESPACE_SEPARATOR):
        return name
    if NAMESPACE_SEPARATOR in name and name in registry:
        return name
    prefix = namespace.strip(NAMESPACE_SEPARATOR)
    while prefix:
        candidate = f"{prefix}{NAMESPACE_SEPARATOR}{name}"
        if candidate in registry:
            logger.debug("Resolved %r to target %s", name, candidate)
            return candidate
        prefix = prefix.rpartition(NAMESPACE_SEPARATOR)[0]
    return name


def running_script() -> str:
    """Return the canonical path of the running script or interpreter."""
    argv0 = sys.argv[0] if sys.argv else ""
    if argv0 and os.path.isfile(argv0):
        return os.path.realpath(argv0)
    return os.path.realpath(sys.executable)


class Resolver:
    """Resolve target names against one registry and namespace."""

    def __init__(self, registry: Registry, namespace: str | None = None) -> None:
        self.registry = registry
        self.namespace = namespace if namespace is not None else registry.namespace

    @classmethod
    def from_settings(cls, settings: Settings) -> Resolver:
        if settings.targets_file is not None:
            registry = Registry.from_file(settings.targets_file)
        else:
            registry = default_registry()
        return cls(registry, settings.namespace)

    def target_uid(self, name: str) -> str:
        return resolve_uid(name, self.namespace, self.registry)

    def is_target(self, name: str) -> bool:
        """Whether ``name`` resolves to a registered build target."""
        uid = self.target_uid(name).lstrip(NAMESPACE_SEPARATOR)
        return bool(uid) and uid in self.registry

    def exepath(self, name: str | None = None) -> str:
        """Return the absolute path of an executable.

        Without a name, the path of the running script is returned. A
        registered target resolves to its recorded location even if that
        file does not exist; any other name is searched on the PATH.

        Raises:
            UnresolvableTarget: If the name is neither registered nor on the PATH.
        """
        if name is None:
            return running_script()
        uid = self.target_uid(name).lstrip(NAMESPACE_SEPARATOR)
        record = self.registry.lookup(uid) if uid else None
        if record is not None:
            path = self.registry.location(record)
            if not os.path.exists(path):
                logger.warning("Target %s points to missing file %s", record.uid, path)
            return path
        found = shutil.which(name) if name else None
        if found is None:
            raise UnresolvableTarget(name)
        logger.debug("Resolved %r on the PATH: %s", name, found)
        return os.path.abspath(found)

    def exename(self, name: str | None = None) -> str:
        return os.path.basename(self.exepath(name))

    def exedir(self, name: str | None = None) -> str:
        return os.path.dirname(self.exepath(name))
