"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
RENDERING_PANEL = "Rendering"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

SiteModuleArgument = Annotated[
    Path,
    typer.Argument(
        metavar="SITE_MODULE",
        help="Python file declaring the site's pages through define_pages(pages) or PAGES.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML site configuration file.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

OutputDirOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Directory receiving the rendered pages (overrides the configuration).",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

BasePathOption = Annotated[
    str | None,
    typer.Option(
        "--base-path",
        help="Deployment root used by pages rendered with absolute links, e.g. '/blog/'.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

MockOption = Annotated[
    bool,
    typer.Option(
        "--mock",
        help="Render previews whose navigation is driven by an embedding frame.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

FileUriOption = Annotated[
    bool,
    typer.Option(
        "--file-uri",
        help="Point directory links at index.html so the output can be browsed from disk.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

AlternateStatusOption = Annotated[
    bool,
    typer.Option(
        "--allow-alternate-status",
        help="Emit error pages as PHP documents answering with a 404 status.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

KeepGoingOption = Annotated[
    bool,
    typer.Option(
        "--keep-going",
        help="Report pages that fail to render and continue with the others.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
