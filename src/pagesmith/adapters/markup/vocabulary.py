"""Vocabulary mapping bracket markup to snippets.

Each entry receives the tokens following its name inside a bracketed group
along with the environment, and returns a snippet. Two vocabularies are
provided:

`CONTENT_VOCABULARY`
: Page content: formatting tags, block structure, quotation, links.

`MANUAL_VOCABULARY`
: Embedded code and class names, where text is taken literally and ``[tok]``
  stands for the token of the enclosing composed snippet.
"""

from __future__ import annotations

import re
from types import MappingProxyType

from pagesmith.core.exceptions import VocabularyError
from pagesmith.core.paragraphs import group_paragraphs
from pagesmith.core.paths import to_path
from pagesmith.core.snippets import Block, NameNavLink, NavLink, Snippet, Token, tag

from .environment import MarkupEnvironment, MarkupParser, Tokens, Vocabulary, VocabularyHandler


LEADING_WHITESPACE = re.compile(r"^\s*")
# Spaces up to and including one line break or a ``|`` separator.
LITERAL_PREFIX = re.compile(r"^(?:(?!\n)\s)*[\n|]?")

EM_DASH = "\u2014"
EN_DASH = "\u2013"
COPYRIGHT = "\u00a9"


def _ltrim_parse(env: MarkupEnvironment, tokens: Tokens) -> Snippet:
    return env.parse_inline(env.parser.ltrim(tokens, LEADING_WHITESPACE))


def _split_argument(name: str, tokens: Tokens, env: MarkupEnvironment) -> tuple[Tokens, Tokens]:
    apart = env.parser.split_words(tokens, 1)
    if not apart:
        raise VocabularyError(f"The '{name}' markup needs an argument")
    word, rest = apart
    return word, rest


def _manual(env: MarkupEnvironment, tokens: Tokens) -> Snippet:
    return MarkupEnvironment(env.parser, MANUAL_VOCABULARY).parse_inline(tokens)


def inline_tag(name: str) -> VocabularyHandler:
    def handle(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
        return tag(name)(_ltrim_parse(env, tokens))

    return handle


def block_tag(name: str) -> VocabularyHandler:
    def handle(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
        return Block(tag(name)(_ltrim_parse(env, tokens)))

    return handle


def document_tag(name: str) -> VocabularyHandler:
    def handle(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
        return Block(tag(name)(env.parse_document(tokens)))

    return handle


def class_tag(name: str, *, document: bool = False) -> VocabularyHandler:
    """Return a handler whose first word is the class of a ``name`` element."""

    def handle(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
        word, rest = _split_argument(f"c{name}", tokens, env)
        body = env.parse_document(rest) if document else _ltrim_parse(env, rest)
        return Block(tag(name, ("class", _manual(env, word)))(body))

    return handle


def constant(value: str) -> VocabularyHandler:
    def handle(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
        return value

    return handle


def _quote_mark(env: MarkupEnvironment) -> str:
    return '"' if env.quote_level % 2 == 0 else "'"


def quote(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
    """Wrap the body in quotes, alternating double and single by depth."""
    mark = _quote_mark(env)
    return [mark, _ltrim_parse(env.nested(), tokens), mark]


def quote_with_punctuation(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
    """Quote the body with the leading word placed inside the closing quote."""
    punctuation, rest = _split_argument("quotepunc", tokens, env)
    mark = _quote_mark(env)
    return [mark, env.nested().parse_inline(rest), env.parser.unescape(punctuation), mark]


def external_link(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
    url, rest = _split_argument("out", tokens, env)
    return tag("a", ("class", "external-link"), ("href", env.parser.unescape(url)))(
        env.parse_inline(rest)
    )


def file_link(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
    path, rest = _split_argument("file", tokens, env)
    return tag("a", ("href", to_path(env.parser.unescape(path))))(env.parse_inline(rest))


def navigation_link(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
    """Link to a page, labelled with the page's name when no body is given."""
    path, rest = _split_argument("nav", tokens, env)
    target = to_path(env.parser.unescape(path))
    if len(rest) == 0:
        return NameNavLink(target)
    return NavLink(target, env.parse_inline(rest))


def literal(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
    return env.parser.unescape(env.parser.ltrim(tokens, LITERAL_PREFIX))


def just(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
    return env.parse_inline(env.parser.ltrim(tokens, LITERAL_PREFIX))


def token(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
    return Token()


def paragraphs(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
    return group_paragraphs(tokens)


def brackets(tokens: Tokens, env: MarkupEnvironment) -> Snippet:
    return ["[", env.parse_inline(tokens), "]"]


CONTENT_VOCABULARY: Vocabulary = MappingProxyType(
    {
        " block": paragraphs,
        "": brackets,
        **{name: inline_tag(name) for name in ("i", "em", "cite", "sup", "sub", "code")},
        **{
            name: block_tag(name)
            for name in ("h1", "h2", "h3", "p", "pre", "li", "dt", "dd", "td")
        },
        **{name: document_tag(name) for name in ("ul", "dl", "tr")},
        "cpre": class_tag("pre"),
        "cdiv": class_tag("div", document=True),
        "cdl": class_tag("dl", document=True),
        "ctable": class_tag("table", document=True),
        "dash": constant(EM_DASH),
        "en": constant(EN_DASH),
        "copyright": constant(COPYRIGHT),
        "pct": constant("%"),
        "quote": quote,
        "quotepunc": quote_with_punctuation,
        "out": external_link,
        "file": file_link,
        "nav": navigation_link,
        "nochops": literal,
    }
)

MANUAL_VOCABULARY: Vocabulary = MappingProxyType(
    {
        "tok": token,
        "nochops": literal,
        "just": just,
    }
)


def build_environment(
    parser: MarkupParser,
    local_vocabulary: Vocabulary | None = None,
    *,
    manual: bool = False,
) -> MarkupEnvironment:
    """Return an environment for ``parser``, ``local_vocabulary`` overriding base entries."""
    base = MANUAL_VOCABULARY if manual else CONTENT_VOCABULARY
    return MarkupEnvironment(parser, base).shadow(local_vocabulary)


def parse_document_source(
    parser: MarkupParser, source: Tokens, local_vocabulary: Vocabulary | None = None
) -> Snippet:
    """Parse a whole document with the content vocabulary."""
    return build_environment(parser, local_vocabulary).parse_document(source)


def parse_inline_source(
    parser: MarkupParser,
    source: Tokens,
    local_vocabulary: Vocabulary | None = None,
    *,
    manual: bool = False,
) -> Snippet:
    """Parse a single line of markup."""
    return build_environment(parser, local_vocabulary, manual=manual).parse_inline(source)


__all__ = [
    "CONTENT_VOCABULARY",
    "MANUAL_VOCABULARY",
    "build_environment",
    "parse_document_source",
    "parse_inline_source",
]
