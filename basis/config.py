"""Runtime settings for target resolution.

Settings are read once at the entry point (CLI or the script helpers in
:mod:`basis.utilities`) and passed down explicitly from there.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping

ENV_TARGETS = "BASIS_TARGETS"
ENV_NAMESPACE = "BASIS_NAMESPACE"


@dataclass(frozen=True)
class Settings:
    targets_file: Path | None = None
    namespace: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``BASIS_TARGETS`` and ``BASIS_NAMESPACE``."""
        env = os.environ if environ is None else environ
        targets = env.get(ENV_TARGETS, "").strip()
        namespace = env.get(ENV_NAMESPACE, "").strip()
        return cls(
            targets_file=Path(targets).expanduser() if targets else None,
            namespace=namespace or None,
        )

    def override(self, targets_file: str | Path | None = None, namespace: str | None = None) -> Settings:
        """Return a copy with any given (non-empty) values replaced."""
        changes: dict[str, object] = {}
        if targets_file:
            changes["targets_file"] = Path(targets_file).expanduser()
        if namespace:
            changes["namespace"] = namespace
        return replace(self, **changes) if changes else self
