"""Navigation link handling."""

from __future__ import annotations

from pagesmith.core.context import HtmlResult, RenderContext, RenderState
from pagesmith.core.paths import SitePath
from pagesmith.core.rules import renders
from pagesmith.core.snippets import NameNavLink, NavLink, Snippet, Tag


def _navigation_tag(target: SitePath, content: Snippet, context: RenderContext) -> Tag:
    options = context.options
    attribute = "data-navlink" if options.mock else "href"
    # Local browsing has no server to resolve directory indexes.
    href = target.plus("index.html") if options.for_file_uri and target.is_directory else target
    return Tag("a", ((attribute, href),), content)


def render_link(
    target: SitePath, content: Snippet, state: RenderState, context: RenderContext
) -> HtmlResult:
    """Render ``content`` as a link to ``target``, or bare when it is the current page."""
    if target.link_would_be_redundant(context.path):
        return context.html(content, state)
    return context.html(_navigation_tag(target, content, context), state)


@renders(NavLink, name="render_nav_link")
def render_nav_link(node: NavLink, state: RenderState, context: RenderContext) -> HtmlResult:
    return render_link(node.target, node.content, state, context)


@renders(NameNavLink, name="render_name_nav_link")
def render_name_nav_link(
    node: NameNavLink, state: RenderState, context: RenderContext
) -> HtmlResult:
    """Render a link labelled with the target page's registered name."""
    page = state.lookup_page(node.target)
    return render_link(node.target, page.name, state, context)
