"""List the targets in the registry."""

from __future__ import annotations

import argparse

from basis.commands import resolver_from_args
from basis.exit_codes import EXIT_SUCCESS
from basis.types import CommandResult


def cmd_targets(args: argparse.Namespace) -> int | CommandResult:
    resolver = resolver_from_args(args)
    registry = resolver.registry
    rows = [
        {
            "uid": record.uid,
            "key": key,
            "type": record.kind.value,
            "location": registry.location(record),
        }
        for key, record in sorted(registry.items(), key=lambda item: item[1].uid)
    ]
    summary = f"{len(rows)} targets"

    if getattr(args, "json", False):
        return CommandResult(
            exit_code=EXIT_SUCCESS,
            summary=summary,
            data={
                "namespace": resolver.namespace,
                "base_dir": str(registry.base_dir),
                "source": str(registry.source) if registry.source else None,
                "targets": rows,
            },
        )

    from rich.console import Console  # noqa: I001
    from rich.table import Table  # noqa: I001

    table = Table(title=f"Targets in {resolver.namespace or '<global>'} namespace")
    table.add_column("UID")
    table.add_column("Type")
    table.add_column("Location", overflow="fold")
    for row in rows:
        table.add_row(row["uid"], row["type"], row["location"])
    Console().print(table)
    return EXIT_SUCCESS
