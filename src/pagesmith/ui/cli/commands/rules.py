"""Implementation of the `pagesmith rules` command."""

from __future__ import annotations

import typer

from pagesmith.adapters.html.renderer import default_renderer

from .._options import VerboseOption
from ..presenter import present_rule_support
from ..state import set_cli_state


def rules(ctx: typer.Context, verbose: VerboseOption = 0) -> None:
    """Print which render operations each snippet variant supports."""
    state = set_cli_state(ctx=ctx, verbosity=verbose)
    present_rule_support(state, default_renderer().engine.registry.describe())


__all__ = ["rules"]
