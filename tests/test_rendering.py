import pytest

from pagesmith.adapters.html.renderer import (
    SnippetRenderer,
    render_html,
    render_title,
    render_unstructured,
)
from pagesmith.core.context import HtmlResult, RenderState
from pagesmith.core.dependencies import EmbeddedDependency, ExternalDependency
from pagesmith.core.exceptions import (
    InvalidSnippetError,
    InvalidTagError,
    PageRenderingError,
    StateUnderflowError,
    UnsupportedOperationError,
)
from pagesmith.core.paths import to_path
from pagesmith.core.rules import renders
from pagesmith.core.snippets import Block, Deps, RawHtml, Tag, Token, block, tag, with_deps


def test_text_and_tags_render_to_html() -> None:
    result = render_html(["Hello ", Tag("b", (), ["world"])], "/")
    assert result.html == "Hello <b>world</b>"
    assert result.js == ()
    assert result.css == ()


def test_text_is_escaped() -> None:
    html = render_html("Fish & chips <cheap> \u2014 \u00a9 2024", "/").html
    assert html == "Fish &amp; chips &lt;cheap&gt; &mdash; &copy; 2024"


def test_attributes_render_before_body() -> None:
    link = Tag("a", (("href", to_path("/x/")), ("title", 'say "hi" & \'bye\'')), "go")
    assert render_html(link, "/y/").html == (
        '<a href="../x/" title="say &quot;hi&quot; &amp; &#39;bye&#39;">go</a>'
    )


def test_builders_and_raw_html() -> None:
    snippet = block(tag("div", ("class", "note"))(RawHtml("<hr />"), "ok"))
    assert render_html(snippet, "/").html == '<div class="note"><hr />ok</div>'


def test_dependencies_are_collected_in_order() -> None:
    first = ExternalDependency("/a.js")
    second = ExternalDependency("/b.js")
    style = EmbeddedDependency("p {}")
    snippet = [
        Block(Deps((first,), (style,))),
        "text",
        with_deps(tag("span")("more"), js=[second]),
    ]

    result = render_html(snippet, "/")
    assert result.html == "text<span>more</span>"
    assert result.js == (first, second)
    assert result.css == (style,)


def test_title_rendering_escapes_text() -> None:
    assert render_title(["Q&A", " <live>"]) == "Q&amp;A &lt;live&gt;"


def test_unstructured_rendering_keeps_text_raw() -> None:
    result = render_unstructured(["a < b", ("&",)], "/")
    assert result.text == "a < b&"


@pytest.mark.parametrize(
    ("render", "snippet", "variant", "operation"),
    [
        (lambda s: render_title(s), Tag("b"), "Tag", "title"),
        (lambda s: render_title(s), RawHtml("x"), "RawHtml", "title"),
        (lambda s: render_html(s, "/"), Token(), "Token", "html"),
        (lambda s: render_unstructured(s, "/"), Block("x"), "Block", "unstructured"),
    ],
)
def test_unsupported_operations_raise(render, snippet, variant: str, operation: str) -> None:
    with pytest.raises(UnsupportedOperationError) as excinfo:
        render(snippet)
    assert excinfo.value.variant == variant
    assert excinfo.value.operation == operation


def test_values_that_are_not_snippets_raise_type_error() -> None:
    with pytest.raises(TypeError):
        render_html(42, "/")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        render_html(["ok", None], "/")  # type: ignore[list-item]


def test_non_snippet_errors_belong_to_the_rendering_hierarchy() -> None:
    with pytest.raises(InvalidSnippetError, match="NoneType") as excinfo:
        render_html(None, "/")  # type: ignore[arg-type]
    assert isinstance(excinfo.value, PageRenderingError)
    assert isinstance(excinfo.value, TypeError)


def test_token_outside_composed_snippet_underflows() -> None:
    with pytest.raises(StateUnderflowError):
        render_unstructured(Token(), "/")


@pytest.mark.parametrize(
    ("name", "attrs"),
    [
        ("B", ()),
        ("1a", ()),
        ("a", (("data1", "x"),)),
        ("a", (("href", "x"), ("href", "y"))),
    ],
)
def test_invalid_tags_are_rejected(name: str, attrs: tuple) -> None:
    with pytest.raises(InvalidTagError):
        Tag(name, attrs)


def test_state_threads_through_siblings() -> None:
    result = render_html(["a", Tag("i", (), "b")], "/", RenderState(counter=5))
    assert result.state.counter == 5


def test_custom_renderer_accepts_extra_rules() -> None:
    class Emphasis(str):
        pass

    @renders(Emphasis, name="render_emphasis")
    def render_emphasis(node, state, context) -> HtmlResult:
        return HtmlResult(state, f"<em>{node}</em>")

    renderer = SnippetRenderer()
    renderer.register(render_emphasis)

    assert renderer.render_html(["a", Emphasis("b")], "/").html == "a<em>b</em>"
    assert render_html(Emphasis("b"), "/").html == "b"


def test_conflicting_rule_registration_is_refused() -> None:
    @renders(str, name="shout")
    def shout(node, state, context) -> HtmlResult:
        return HtmlResult(state, node.upper())

    with pytest.raises(TypeError, match="Duplicate html rule"):
        SnippetRenderer().register(shout)
