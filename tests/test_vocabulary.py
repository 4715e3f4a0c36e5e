"""Vocabulary tests driven by a minimal stand-in for the markup parser.

Tokens are lists of plain strings and ``(name, tokens)`` tuples standing for
bracketed groups; a lone ``"\\n\\n"`` string separates paragraphs.
"""

from __future__ import annotations

import re

import pytest

from pagesmith.adapters.html.renderer import render_html
from pagesmith.adapters.markup import (
    CONTENT_VOCABULARY,
    MarkupEnvironment,
    build_environment,
    parse_document_source,
    parse_inline_source,
)
from pagesmith.core.context import RenderState
from pagesmith.core.exceptions import VocabularyError
from pagesmith.core.pages import define_page, make_page
from pagesmith.core.snippets import NameNavLink, NavLink, Token, composed


PARAGRAPH_BREAK = "\n\n"


class FakeParser:
    def parse_inline(self, env: MarkupEnvironment, tokens):
        parsed = []
        for item in tokens:
            if isinstance(item, tuple):
                name, body = item
                handler = env.lookup(name)
                if handler is None:
                    raise KeyError(name)
                parsed.append(handler(body, env))
            else:
                parsed.append(item)
        return parsed

    def parse_document(self, env: MarkupEnvironment, paragraphs):
        group = env.lookup(" block")
        return [group(self.parse_inline(env, paragraph), env) for paragraph in paragraphs]

    def split_paragraphs(self, tokens):
        paragraphs = [[]]
        for item in tokens:
            if item == PARAGRAPH_BREAK:
                paragraphs.append([])
            else:
                paragraphs[-1].append(item)
        return [paragraph for paragraph in paragraphs if paragraph]

    def ltrim(self, tokens, pattern: re.Pattern[str]):
        tokens = list(tokens)
        if tokens and isinstance(tokens[0], str):
            head = tokens[0][pattern.match(tokens[0]).end():]
            tokens = ([head] if head else []) + tokens[1:]
        return tokens

    def rtrim(self, tokens, pattern: re.Pattern[str]):
        tokens = list(tokens)
        if tokens and isinstance(tokens[-1], str):
            tail = pattern.sub("", tokens[-1], count=1)
            tokens = tokens[:-1] + ([tail] if tail else [])
        return tokens

    def split_words(self, tokens, count: int):
        if not tokens or not isinstance(tokens[0], str):
            return None
        parts = tokens[0].split(None, count)
        if len(parts) < count:
            return None
        words = tuple([word] for word in parts[:count])
        rest = parts[count:] + list(tokens[1:])
        return (*words, rest)

    def unescape(self, tokens) -> str:
        return "".join(item for item in tokens if isinstance(item, str))


@pytest.fixture
def parser() -> FakeParser:
    return FakeParser()


def _html(snippet, path: str = "/") -> str:
    return render_html(snippet, path).html


def test_inline_tags_trim_leading_space(parser: FakeParser) -> None:
    parsed = parse_inline_source(parser, ["Say ", ("em", ["  hi"]), ("code", [" x < y"])])
    assert _html(parsed) == "Say <em>hi</em><code>x &lt; y</code>"


def test_document_groups_paragraphs_around_blocks(parser: FakeParser) -> None:
    parsed = parse_document_source(parser, ["Hello ", ("h1", ["Title"]), " world"])
    assert _html(parsed) == "<p>Hello</p><h1>Title</h1><p>world</p>"


def test_document_tags_parse_their_body_as_a_document(parser: FakeParser) -> None:
    parsed = parse_inline_source(parser, [("ul", [("li", ["one"]), ("li", [" two"])])])
    assert _html(parsed) == "<ul><li>one</li><li>two</li></ul>"


def test_class_tags_take_their_class_from_the_first_word(parser: FakeParser) -> None:
    div = parse_inline_source(parser, [("cdiv", ["note First", PARAGRAPH_BREAK, "Second"])])
    assert _html(div) == '<div class="note"><p>First</p><p>Second</p></div>'

    pre = parse_inline_source(parser, [("cpre", ["shell $ ls"])])
    assert _html(pre) == '<pre class="shell">$ ls</pre>'


def test_symbols(parser: FakeParser) -> None:
    parsed = parse_inline_source(
        parser, [("dash", []), ("en", []), ("copyright", []), ("pct", []), ("", ["x"])]
    )
    assert _html(parsed) == "&mdash;&ndash;&copy;%[x]"


def test_quotes_alternate_with_depth(parser: FakeParser) -> None:
    parsed = parse_inline_source(parser, [("quote", [" a ", ("quote", ["b ", ("quote", ["c"])])])])
    assert _html(parsed) == "\"a 'b \"c\"'\""


def test_quote_punctuation_goes_inside(parser: FakeParser) -> None:
    parsed = parse_inline_source(parser, [("quotepunc", [", Hello"])])
    assert _html(parsed) == '"Hello,"'


def test_links(parser: FakeParser) -> None:
    out = parse_inline_source(parser, [("out", ["https://example.com/?a=1&b=2 Example"])])
    assert _html(out) == (
        '<a class="external-link" href="https://example.com/?a=1&amp;b=2">Example</a>'
    )

    file_link = parse_inline_source(parser, [("file", ["/docs/a.pdf the PDF"])])
    assert _html(file_link, "/blog/") == '<a href="../docs/a.pdf">the PDF</a>'


def test_nav_without_body_links_by_name(parser: FakeParser) -> None:
    named = parse_inline_source(parser, [("nav", ["/about/"])])
    labelled = parse_inline_source(parser, [("nav", ["/about/ About us"])])
    assert named == [NameNavLink("/about/")]
    assert isinstance(labelled[0], NavLink)

    pages = {}
    define_page(pages, make_page("/about/", name="About", title="", icon="/i.ico", body=""))
    assert render_html(named, "/", RenderState.fresh(pages)).html == '<a href="about/">About</a>'
    assert _html(labelled) == '<a href="about/">About us</a>'


@pytest.mark.parametrize("name", ["out", "file", "nav", "quotepunc", "cdiv", "cpre"])
def test_missing_arguments_raise(parser: FakeParser, name: str) -> None:
    with pytest.raises(VocabularyError, match=name):
        parse_inline_source(parser, [(name, ["   "])])


def test_literal_text(parser: FakeParser) -> None:
    parsed = parse_inline_source(parser, [("nochops", ["  \n[not markup]  "])])
    assert parsed == ["[not markup]  "]
    piped = parse_inline_source(parser, [("nochops", [" | kept"])])
    assert piped == [" kept"]


def test_manual_vocabulary_feeds_composed_snippets(parser: FakeParser) -> None:
    css = parse_inline_source(parser, ["#", ("tok", []), " { color: red; }"], manual=True)
    body = parse_inline_source(parser, [("just", [" <b id='", ("tok", []), "'>"])], manual=True)
    assert css[1] == Token()

    result = render_html(composed(manual_css=css, manual_html=body), "/")
    assert result.html == "<b id='gs0gs'>"
    assert result.css[0].code == "#gs0gs { color: red; }"


def test_manual_vocabulary_has_no_content_tags(parser: FakeParser) -> None:
    with pytest.raises(KeyError):
        parse_inline_source(parser, [("em", ["x"])], manual=True)


def test_local_entries_shadow_the_base_vocabulary(parser: FakeParser) -> None:
    env = build_environment(parser, {"dash": lambda tokens, env: "--"})
    assert env.parse_inline([("dash", [])]) == ["--"]
    assert env.lookup("em") is CONTENT_VOCABULARY["em"]
    assert CONTENT_VOCABULARY["dash"]([], env) == "\u2014"
