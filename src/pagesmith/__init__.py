"""Primary public API for PageSmith."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from pagesmith.adapters.html.renderer import (
    SnippetRenderer,
    default_renderer,
    render_html,
    render_title,
    render_unstructured,
)
from pagesmith.core.assembler import PageOutput, assemble_page, render_all_pages, render_pages
from pagesmith.core.config import RenderOptions, SiteConfig, load_site_config
from pagesmith.core.context import HtmlResult, RenderContext, RenderState, TextResult
from pagesmith.core.dependencies import (
    ConditionalDependency,
    EmbeddedDependency,
    ExternalDependency,
    IncludeOnceBundle,
    include_once_js,
)
from pagesmith.core.exceptions import PageRenderingError
from pagesmith.core.pages import Page, PageRegistry, define_page, make_page
from pagesmith.core.paragraphs import group_paragraphs
from pagesmith.core.paths import ROOT_PATH, MaskedPath, SitePath, mask_path, parse_path, to_path
from pagesmith.core.rules import RenderOperation, renders
from pagesmith.core.snippets import (
    Block,
    Composed,
    Deps,
    NameNavLink,
    NavLink,
    RawHtml,
    Snippet,
    Tag,
    Token,
    block,
    composed,
    tag,
    with_deps,
)


try:
    __version__ = _pkg_version("pagesmith")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "ROOT_PATH",
    "Block",
    "Composed",
    "ConditionalDependency",
    "Deps",
    "EmbeddedDependency",
    "ExternalDependency",
    "HtmlResult",
    "IncludeOnceBundle",
    "MaskedPath",
    "NameNavLink",
    "NavLink",
    "Page",
    "PageOutput",
    "PageRegistry",
    "PageRenderingError",
    "RawHtml",
    "RenderContext",
    "RenderOperation",
    "RenderOptions",
    "RenderState",
    "SiteConfig",
    "SitePath",
    "Snippet",
    "SnippetRenderer",
    "Tag",
    "TextResult",
    "Token",
    "__version__",
    "assemble_page",
    "block",
    "composed",
    "default_renderer",
    "define_page",
    "group_paragraphs",
    "include_once_js",
    "load_site_config",
    "make_page",
    "mask_path",
    "parse_path",
    "render_all_pages",
    "render_html",
    "render_pages",
    "render_title",
    "render_unstructured",
    "renders",
    "tag",
    "to_path",
    "with_deps",
]
