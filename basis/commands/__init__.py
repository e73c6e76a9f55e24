"""Command handlers for the basis CLI."""

from __future__ import annotations

import argparse

from basis.config import Settings
from basis.resolver import Resolver


def resolver_from_args(args: argparse.Namespace) -> Resolver:
    """Build a resolver from the environment and the global CLI options."""
    settings = Settings.from_env().override(
        targets_file=getattr(args, "targets", None),
        namespace=getattr(args, "namespace", None),
    )
    return Resolver.from_settings(settings)
