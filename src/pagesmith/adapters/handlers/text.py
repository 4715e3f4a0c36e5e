"""Title and unstructured text handlers.

Titles only accept text and sequences of text. Unstructured rendering feeds
attribute values and embedded code: nothing is escaped, and :class:`Token`
placeholders resolve to the token of the innermost composed snippet.
"""

from __future__ import annotations

from pagesmith.core.context import RenderContext, RenderState, TextResult
from pagesmith.core.rules import RenderOperation, renders
from pagesmith.core.snippets import Snippet, Token

from ..html.utils import escape_html


@renders(str, operation=RenderOperation.TITLE, name="title_text")
def title_text(node: str, context: RenderContext) -> str:
    return escape_html(node)


@renders(list, tuple, operation=RenderOperation.TITLE, name="title_sequence")
def title_sequence(node: list[Snippet] | tuple[Snippet, ...], context: RenderContext) -> str:
    return "".join(context.title(child) for child in node)


@renders(str, operation=RenderOperation.UNSTRUCTURED, name="unstructured_text")
def unstructured_text(node: str, state: RenderState, context: RenderContext) -> TextResult:
    return TextResult(state, node)


@renders(list, tuple, operation=RenderOperation.UNSTRUCTURED, name="unstructured_sequence")
def unstructured_sequence(
    node: list[Snippet] | tuple[Snippet, ...], state: RenderState, context: RenderContext
) -> TextResult:
    parts: list[str] = []
    for child in node:
        rendered = context.unstructured(child, state)
        state = rendered.state
        parts.append(rendered.text)
    return TextResult(state, "".join(parts))


@renders(Token, operation=RenderOperation.UNSTRUCTURED, name="unstructured_token")
def unstructured_token(node: Token, state: RenderState, context: RenderContext) -> TextResult:
    """Resolve the placeholder against the top of the token stack."""
    return TextResult(state, state.current_token)
