"""Auxiliary helpers used by CLI commands."""

from __future__ import annotations

from collections.abc import Mapping
import importlib.util
from pathlib import Path
from types import ModuleType

import typer

from pagesmith.core.pages import Page, PageRegistry, define_page


def load_site_module(path: Path) -> ModuleType:
    """Import a Python file declaring the pages of a site."""
    module_name = f"pagesmith_site_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise typer.BadParameter(f"Cannot import site definition from '{path}'.")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def collect_site_pages(module: ModuleType) -> PageRegistry:
    """Build the page registry declared by a site module.

    The module either exposes ``define_pages(pages)``, which fills the registry
    in place, or a ``PAGES`` mapping or iterable of :class:`Page` records. Both
    may be present; ``PAGES`` entries are registered last.
    """
    define_pages = getattr(module, "define_pages", None)
    declared = getattr(module, "PAGES", None)
    if define_pages is None and declared is None:
        raise typer.BadParameter(
            f"Site module '{module.__name__}' defines neither define_pages() nor PAGES."
        )

    pages: PageRegistry = {}
    if define_pages is not None:
        if not callable(define_pages):
            raise typer.BadParameter("define_pages must be callable.")
        define_pages(pages)

    if declared is not None:
        entries = declared.values() if isinstance(declared, Mapping) else declared
        for page in entries:
            if not isinstance(page, Page):
                raise typer.BadParameter(
                    f"PAGES entries must be Page records, got {type(page).__name__}."
                )
            define_page(pages, page)

    return pages


def output_file_path(output_dir: Path, site_path: str) -> Path:
    """Map an absolute site path such as ``/a/index.html`` below ``output_dir``."""
    return output_dir.joinpath(*site_path.lstrip("/").split("/"))


def write_output_file(target: Path, content: str) -> None:
    """Persist a rendered page to disk, creating parent directories as needed."""
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as exc:  # pragma: no cover - filesystem errors
        raise OSError(f"Failed to write page output to '{target}': {exc}") from exc


__all__ = [
    "collect_site_pages",
    "load_site_module",
    "output_file_path",
    "write_output_file",
]
