"""Built-in baseline handlers used by the renderer."""

from __future__ import annotations

from pagesmith.core.context import HtmlResult, RenderContext, RenderState, TextResult
from pagesmith.core.paths import SitePath
from pagesmith.core.rules import renders
from pagesmith.core.snippets import Block, Deps, RawHtml, Snippet, Tag

from ..html.utils import escape_attribute, escape_html


@renders(str, name="render_text")
def render_text(node: str, state: RenderState, context: RenderContext) -> HtmlResult:
    """Render plain strings as escaped text."""
    return HtmlResult(state, escape_html(node))


@renders(list, tuple, name="render_sequence")
def render_sequence(
    node: list[Snippet] | tuple[Snippet, ...], state: RenderState, context: RenderContext
) -> HtmlResult:
    """Render children left to right, threading the state through each of them."""
    html: list[str] = []
    js: list = []
    css: list = []
    for child in node:
        rendered = context.html(child, state)
        state = rendered.state
        html.append(rendered.html)
        js.extend(rendered.js)
        css.extend(rendered.css)
    return HtmlResult(state, "".join(html), tuple(js), tuple(css))


def _attribute_text(value: object, state: RenderState, context: RenderContext) -> TextResult:
    if isinstance(value, SitePath):
        return TextResult(state, value.relative_from(context.path))
    return context.unstructured(value, state)


@renders(Tag, name="render_tag")
def render_tag(node: Tag, state: RenderState, context: RenderContext) -> HtmlResult:
    """Render an element, its attributes first and then its body."""
    attributes: list[str] = []
    for name, value in node.attrs:
        rendered = _attribute_text(value, state, context)
        state = rendered.state
        attributes.append(f' {name}="{escape_attribute(rendered.text)}"')
    body = context.html(node.body, state)
    markup = f"<{node.name}{''.join(attributes)}>{body.html}</{node.name}>"
    return HtmlResult(body.state, markup, body.js, body.css)


@renders(Block, name="render_block")
def render_block(node: Block, state: RenderState, context: RenderContext) -> HtmlResult:
    return context.html(node.content, state)


@renders(RawHtml, name="render_raw_html")
def render_raw_html(node: RawHtml, state: RenderState, context: RenderContext) -> HtmlResult:
    return HtmlResult(state, node.html)


@renders(Deps, name="render_dependencies")
def render_dependencies(node: Deps, state: RenderState, context: RenderContext) -> HtmlResult:
    """Emit declared dependencies without any visible markup."""
    return HtmlResult(state, "", node.js, node.css)
