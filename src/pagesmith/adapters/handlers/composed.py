"""Composed snippet handling.

A composed snippet owns one token, unique within the page, that its generators
can splice into ids, class names and embedded code. Script and stylesheet
generators all run before any HTML generator so that markup can refer to the
rules and scripts declared for the same token.
"""

from __future__ import annotations

from pagesmith.core.context import HtmlResult, RenderContext, RenderState
from pagesmith.core.dependencies import Dependency
from pagesmith.core.rules import renders
from pagesmith.core.snippets import Composed


@renders(Composed, name="render_composed")
def render_composed(node: Composed, state: RenderState, context: RenderContext) -> HtmlResult:
    """Allocate the snippet's token and run its generators with the token in scope."""
    token, state = state.allocate_token()
    js: list[Dependency] = []
    css: list[Dependency] = []
    html: list[str] = []

    for generate in node.js:
        inner_state, dependency = generate(state.push_token(token), context)
        state = inner_state.pop_token()
        js.append(dependency)

    for generate in node.css:
        inner_state, dependency = generate(state.push_token(token), context)
        state = inner_state.pop_token()
        css.append(dependency)

    for generate in node.html:
        rendered = generate(state.push_token(token), context)
        state = rendered.state.pop_token()
        html.append(rendered.html)
        js.extend(rendered.js)
        css.extend(rendered.css)

    return HtmlResult(state, "".join(html), tuple(js), tuple(css))
