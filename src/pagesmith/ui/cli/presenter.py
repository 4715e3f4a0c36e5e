"""Rich-aware presenters for CLI output and diagnostics."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from rich import box
from rich.table import Table

from pagesmith.core.rules import RenderOperation

from .state import CLIState


def _build_table(
    *,
    title: str | None,
    columns: Sequence[str],
    header_style: str = "bold cyan",
) -> Table:
    """Create a Rich table with the house style."""
    table = Table(
        title=title or None,
        box=box.SQUARE,
        show_edge=True,
        header_style=header_style,
    )
    for col in columns:
        table.add_column(col)
    return table


def _format_path(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _size_details(path: Path) -> str:
    try:
        size = path.stat().st_size
    except OSError:
        return ""
    if size < 1024:
        return f"{size} B"
    return f"{size / 1024:.1f} KiB"


def present_build_summary(
    state: CLIState,
    written: Sequence[tuple[str, Path]],
    failures: int = 0,
) -> None:
    """Display the pages written by a build."""
    table = _build_table(title=None, columns=["Page", "Location", "Filesize"])
    for permalink, path in written:
        table.add_row(permalink, _format_path(path), _size_details(path))
    state.console.print(table)

    summary = f"{len(written)} page(s) written"
    if failures:
        summary += f", {failures} failed"
    state.console.print(summary, highlight=False)


def present_rule_support(state: CLIState, rules: Sequence[Mapping[str, Any]]) -> None:
    """Render which render operations every snippet variant supports."""
    operations = [operation.name for operation in RenderOperation]
    matrix: dict[str, dict[str, Any]] = {}
    for entry in rules:
        variant = str(entry.get("variant", ""))
        matrix.setdefault(variant, {})[str(entry.get("operation", ""))] = entry.get("name")

    show_names = state.verbosity >= 1
    table = _build_table(
        title="Render Support",
        columns=["Variant", *(operation.capitalize() for operation in operations)],
    )
    for variant, handlers in matrix.items():
        cells = []
        for operation in operations:
            name = handlers.get(operation)
            if name is None:
                cells.append("-")
            else:
                cells.append(str(name) if show_names else "yes")
        table.add_row(variant, *cells)
    state.console.print(table)


__all__ = ["present_build_summary", "present_rule_support"]
