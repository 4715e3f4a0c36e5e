"""Bracket markup vocabulary for PageSmith sites."""

from __future__ import annotations

from .environment import MarkupEnvironment, MarkupParser, Tokens, Vocabulary, VocabularyHandler
from .vocabulary import (
    CONTENT_VOCABULARY,
    MANUAL_VOCABULARY,
    build_environment,
    parse_document_source,
    parse_inline_source,
)


__all__ = [
    "CONTENT_VOCABULARY",
    "MANUAL_VOCABULARY",
    "MarkupEnvironment",
    "MarkupParser",
    "Tokens",
    "Vocabulary",
    "VocabularyHandler",
    "build_environment",
    "parse_document_source",
    "parse_inline_source",
]
