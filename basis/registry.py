"""Registry of the build targets known to a project.

The registry is generated at build time as a YAML (or JSON) data file that
lists, for every build target, its ``LOCATION`` and ``TYPE``. Target names
are stored under a sanitized key so that every language binding can use the
key as an identifier. Relative locations are relative to the registry's base
directory, which is anchored at the location of the data file itself; moving
the whole installation therefore keeps every relative location valid.
"""

from __future__ import annotations

import json
import logging
import os
import re
import threading
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft7Validator

from basis.errors import RegistryCollision, RegistryError

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_TARGETS_FILE = PACKAGE_DIR / "targets.yaml"
SCHEMA_PATH = PACKAGE_DIR / "schema" / "targets.schema.json"

FIELDS = ("LOCATION", "TYPE")

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_]")


def sanitize_uid(uid: str) -> str:
    """Map a target UID to its registry key (alphanumerics and underscores only)."""
    return _UNSAFE_CHARS_RE.sub("_", uid)


class TargetKind(Enum):
    EXECUTABLE = "executable"
    LIBRARY = "library"
    OTHER = "other"

    @classmethod
    def from_type(cls, value: str | None) -> TargetKind:
        """Classify a build system target TYPE property."""
        if not value:
            return cls.OTHER
        value = value.upper()
        if "LIBRARY" in value:
            return cls.LIBRARY
        if value in ("EXECUTABLE", "SCRIPT") or value.endswith(("_EXECUTABLE", "_SCRIPT")):
            return cls.EXECUTABLE
        return cls.OTHER


@dataclass(frozen=True)
class TargetRecord:
    uid: str
    location: str
    location_is_relative: bool
    kind: TargetKind

    @classmethod
    def create(cls, uid: str, location: str, target_type: str | None = None) -> TargetRecord:
        return cls(
            uid=uid,
            location=location,
            location_is_relative=not os.path.isabs(location),
            kind=TargetKind.from_type(target_type),
        )


class Registry(Mapping[str, TargetRecord]):
    """Read-only mapping from sanitized target key to :class:`TargetRecord`.

    Item access and membership tests accept either the registered name or
    its key, so both ``registry["proj.sub.tool"]`` and
    ``registry["proj_sub_tool"]`` work. A different name that only maps to
    the same key, such as ``proj.sub-tool``, is not found.
    """

    def __init__(
        self,
        records: Iterable[TargetRecord] = (),
        base_dir: Path | None = None,
        namespace: str | None = None,
        source: Path | None = None,
    ) -> None:
        self._records: dict[str, TargetRecord] = {}
        for record in records:
            key = sanitize_uid(record.uid)
            existing = self._records.get(key)
            if existing is not None and existing.uid != record.uid:
                raise RegistryCollision(key, (existing.uid, record.uid))
            self._records[key] = record
        self.base_dir = (base_dir or PACKAGE_DIR).resolve()
        self.namespace = namespace or ""
        self.source = source

    def __getitem__(self, uid: str) -> TargetRecord:
        record = self.lookup(uid)
        if record is None:
            raise KeyError(uid)
        return record

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"Registry({len(self)} targets, base_dir={str(self.base_dir)!r})"

    def lookup(self, uid: str) -> TargetRecord | None:
        key = sanitize_uid(uid)
        record = self._records.get(key)
        if record is None or uid not in (record.uid, key):
            return None
        return record

    def location(self, record: TargetRecord) -> str:
        """Return the absolute location of a target.

        Relative locations are joined to the registry's base directory. The
        file is not required to exist.
        """
        if record.location_is_relative:
            return os.path.normpath(os.path.join(self.base_dir, record.location))
        return os.path.normpath(record.location)

    @classmethod
    def from_properties(
        cls,
        properties: Iterable[tuple[str, str, str]],
        base_dir: Path | None = None,
        namespace: str | None = None,
        source: Path | None = None,
    ) -> Registry:
        """Build a registry from ``(target, field, value)`` triples.

        Args:
            properties: Triples where ``field`` is ``LOCATION`` or ``TYPE``.
            base_dir: Anchor for relative locations.
            namespace: Project namespace the targets were generated for.
            source: Data file the triples came from, for diagnostics.

        Raises:
            RegistryCollision: If two names map to the same key.
            RegistryError: If a field is unknown or a target has no location.
        """
        names: dict[str, str] = {}
        fields: dict[str, dict[str, str]] = {}
        for name, field_name, value in properties:
            if field_name not in FIELDS:
                raise RegistryError(f"Unknown property {field_name!r} for target {name!r}")
            key = sanitize_uid(name)
            previous = names.setdefault(key, name)
            if previous != name:
                raise RegistryCollision(key, (previous, name))
            fields.setdefault(key, {})[field_name] = value

        records: list[TargetRecord] = []
        for key, values in fields.items():
            location = values.get("LOCATION")
            if not location:
                raise RegistryError(f"Target {names[key]!r} has no LOCATION")
            records.append(TargetRecord.create(names[key], location, values.get("TYPE")))
        return cls(records, base_dir=base_dir, namespace=namespace, source=source)

    @classmethod
    def from_file(cls, path: Path) -> Registry:
        """Load and validate a registry data file."""
        data_path = path.resolve()
        data = load_registry_data(data_path)
        properties: list[tuple[str, str, str]] = []
        for name, values in (data.get("targets") or {}).items():
            for field_name in FIELDS:
                if field_name in values:
                    properties.append((name, field_name, values[field_name]))
        properties.extend(tuple(entry) for entry in data.get("properties") or [])

        base_dir = data_path.parent
        if data.get("base"):
            base_dir = base_dir / data["base"]
        registry = cls.from_properties(
            properties,
            base_dir=base_dir,
            namespace=data.get("namespace"),
            source=data_path,
        )
        logger.debug("Loaded %d targets from %s", len(registry), data_path)
        return registry


def get_schema() -> dict[str, Any]:
    """Load the registry data file schema."""
    data = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Schema at {SCHEMA_PATH} is not a JSON object")
    return data


def validate_registry_data(data: Any) -> list[str]:
    """Validate parsed registry data.

    Returns:
        Sorted list of validation error strings.
    """
    validator = Draft7Validator(get_schema())
    errors: list[str] = []
    for err in validator.iter_errors(data):
        path = ".".join(str(p) for p in err.path) or "<root>"
        errors.append(f"{path}: {err.message}")
    return sorted(errors)


def load_registry_data(path: Path) -> dict[str, Any]:
    """Read a registry data file and check it against the schema.

    An empty file yields an empty registry.

    Raises:
        RegistryError: If the file is missing, unparsable or invalid.
    """
    if not path.exists():
        raise RegistryError(f"Target registry not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise RegistryError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    errors = validate_registry_data(data)
    if errors:
        raise RegistryError(f"Target registry {path} failed validation", errors=errors)
    return data


_default_registry: Registry | None = None
_default_lock = threading.Lock()


def default_registry() -> Registry:
    """Return the process-wide registry, loading it on first use.

    The registry is read from the ``targets.yaml`` installed next to this
    package. A missing file yields an empty registry.
    """
    global _default_registry
    if _default_registry is not None:
        return _default_registry
    with _default_lock:
        if _default_registry is None:
            if DEFAULT_TARGETS_FILE.exists():
                _default_registry = Registry.from_file(DEFAULT_TARGETS_FILE)
            else:
                logger.debug("No target registry at %s, using an empty one", DEFAULT_TARGETS_FILE)
                _default_registry = Registry()
    return _default_registry


def reset_default_registry() -> None:
    """Forget the process-wide registry so the next use reloads it."""
    global _default_registry
    with _default_lock:
        _default_registry = None
