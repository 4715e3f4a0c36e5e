"""Parser boundary for the bracket markup language.

The tokenizer and parser of the markup language live outside this package.
They reach the vocabulary through the :class:`MarkupParser` protocol: markup is
a sequence of tokens in which plain text alternates with bracketed groups, and
each bracketed group is dispatched to the vocabulary handler named by its first
word.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
import re
from types import MappingProxyType
from typing import Any, Protocol, TypeAlias

from pagesmith.core.snippets import Snippet


Tokens: TypeAlias = Sequence[Any]
VocabularyHandler: TypeAlias = "Callable[[Tokens, MarkupEnvironment], Snippet]"
Vocabulary: TypeAlias = Mapping[str, VocabularyHandler]


class MarkupParser(Protocol):
    """Operations the vocabulary needs from the markup parser."""

    def parse_inline(self, env: MarkupEnvironment, tokens: Tokens) -> Snippet:
        """Parse ``tokens`` as inline content."""

    def parse_document(self, env: MarkupEnvironment, paragraphs: Sequence[Tokens]) -> Snippet:
        """Parse paragraphs as document content, grouping them through ``" block"``."""

    def split_paragraphs(self, tokens: Tokens) -> list[Tokens]:
        """Split ``tokens`` on blank lines."""

    def ltrim(self, tokens: Tokens, pattern: re.Pattern[str]) -> Tokens:
        """Drop the prefix of the leading text matched by ``pattern``."""

    def rtrim(self, tokens: Tokens, pattern: re.Pattern[str]) -> Tokens:
        """Drop the suffix of the trailing text matched by ``pattern``."""

    def split_words(self, tokens: Tokens, count: int) -> tuple[Tokens, ...] | None:
        """Return ``count`` leading words followed by the remaining tokens.

        ``None`` is returned when fewer than ``count`` words are available.
        """

    def unescape(self, tokens: Tokens) -> str:
        """Return the literal source text of ``tokens``."""


@dataclass(frozen=True, slots=True)
class MarkupEnvironment:
    """Vocabulary in scope while parsing, with the parser driving it."""

    parser: MarkupParser
    vocabulary: Vocabulary = field(default_factory=lambda: MappingProxyType({}))
    quote_level: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "vocabulary", MappingProxyType(dict(self.vocabulary)))

    def shadow(self, entries: Vocabulary | None) -> MarkupEnvironment:
        """Return an environment whose vocabulary is overridden by ``entries``."""
        if not entries:
            return self
        return replace(self, vocabulary={**self.vocabulary, **entries})

    def nested(self) -> MarkupEnvironment:
        """Return the environment used inside one more level of quotation."""
        return replace(self, quote_level=self.quote_level + 1)

    def lookup(self, name: str) -> VocabularyHandler | None:
        return self.vocabulary.get(name)

    def parse_inline(self, tokens: Tokens) -> Snippet:
        return self.parser.parse_inline(self, tokens)

    def parse_document(self, tokens: Tokens) -> Snippet:
        return self.parser.parse_document(self, self.parser.split_paragraphs(tokens))


__all__ = [
    "MarkupEnvironment",
    "MarkupParser",
    "Tokens",
    "Vocabulary",
    "VocabularyHandler",
]
