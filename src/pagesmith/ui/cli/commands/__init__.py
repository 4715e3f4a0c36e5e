"""CLI command implementations exposed via `pagesmith.ui.cli`."""

from __future__ import annotations

from .build import build
from .rules import rules


__all__ = ["build", "rules"]
