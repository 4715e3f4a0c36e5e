"""Page assembly: render each page of a registry into a complete document.

The assembler renders a page's body once, collects the scripts and
stylesheets its snippets declared, and wraps everything in the document shell.
Three mutually exclusive output modes alter the result:

`mock`
: Navigation links carry ``data-navlink`` instead of ``href`` and a preview
  script forwards clicks to the embedding frame, so a live editor can drive
  navigation itself.

`for_file_uri`
: Links to directories point at their ``index.html`` so that the output can be
  browsed straight from the filesystem.

`allow_alternate_status`
: Pages flagged as error pages are emitted as PHP documents answering with a
  404 status.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Literal

from pagesmith.adapters.html.renderer import default_renderer
from pagesmith.adapters.html.utils import escape_attribute

from .config import RenderOptions, ensure_single_mode
from .context import RenderState
from .dependencies import (
    EmbeddedDependency,
    render_css_dependencies,
    render_js_dependencies,
)
from .diagnostics import DiagnosticEmitter, ensure_emitter
from .exceptions import PageRenderingError, exception_hint
from .pages import Page, freeze_pages
from .paths import MaskedPath, SitePath, to_path


logger = logging.getLogger(__name__)

OutputType = Literal["html", "alternate"]

OUTPUT_FILENAMES: dict[str, str] = {"html": "index.html", "alternate": "index.php"}

ALTERNATE_STATUS_PREAMBLE = '<?php header( "HTTP/1.1 404 Not Found" ); ?>\n'

PREVIEW_CSS = EmbeddedDependency(
    "a[data-navlink] { cursor: pointer; text-decoration: underline; color: #0645ad; }"
)

PREVIEW_JS = EmbeddedDependency(
    "document.addEventListener( \"click\", function ( event ) {"
    " var node = event.target;"
    " while ( node && !( node.getAttribute && node.hasAttribute( \"data-navlink\" ) ) )"
    " node = node.parentNode;"
    " if ( !node ) return;"
    " event.preventDefault();"
    " window.parent.postMessage("
    " { type: \"navigate\", path: node.getAttribute( \"data-navlink\" ) }, \"*\" );"
    " } );"
)


@dataclass(frozen=True, slots=True)
class PageOutput:
    """Rendered document text and the kind of file it must be written to."""

    type: OutputType
    text: str

    @property
    def filename(self) -> str:
        return OUTPUT_FILENAMES[self.type]


def _base_tag(render_path: SitePath | MaskedPath, options: RenderOptions) -> str:
    if not options.mock or options.mock_base_tag_prefix is None:
        return ""
    href = options.mock_base_tag_prefix + render_path.to_base_tag_suffix()
    return f'<base href="{escape_attribute(href)}" />'


def assemble_page(
    page: Page,
    render_path: SitePath | MaskedPath | str,
    pages: Mapping[str, Page],
    options: RenderOptions | None = None,
) -> PageOutput:
    """Render ``page`` as it will be served from ``render_path``."""
    options = ensure_single_mode(options or RenderOptions())
    render_path = to_path(render_path)
    renderer = default_renderer()

    body = renderer.render_html(page.body, render_path, RenderState.fresh(pages), options)
    title = renderer.render_title(page.title)

    js = list(body.js)
    css = list(body.css)
    if options.mock:
        js.append(PREVIEW_JS)
        css.append(PREVIEW_CSS)

    icon = escape_attribute(page.icon.relative_from(render_path))
    document = (
        "<!DOCTYPE html>\n"
        '<html lang="en">'
        "<head>"
        '<meta http-equiv="Content-Type" content="text/html;charset=UTF-8" />'
        f"{_base_tag(render_path, options)}"
        f"<title>{title}</title>"
        f"{''.join(render_css_dependencies(css, render_path))}"
        f'<link rel="shortcut icon" href="{icon}" />'
        "</head>"
        f"<body>{body.html}{''.join(render_js_dependencies(js, render_path))}</body>"
        "</html>"
    )

    if not (page.is_404 and options.allow_alternate_status):
        return PageOutput("html", document)

    # Escape PHP open tags so only the preamble is executed.
    document = document.replace("<?", "<<?php?>?")
    return PageOutput("alternate", ALTERNATE_STATUS_PREAMBLE + document)


def _render_path(permalink: str, page: Page, base_path: SitePath) -> SitePath | MaskedPath:
    if page.uses_absolute:
        return MaskedPath(page.permalink, base_path)
    return to_path(permalink)


def render_pages(
    pages: Mapping[str, Page],
    base_path: SitePath | str = "/",
    options: RenderOptions | None = None,
) -> dict[str, PageOutput]:
    """Render every page of the registry, keyed by absolute permalink."""
    options = ensure_single_mode(options or RenderOptions())
    frozen = freeze_pages(pages)
    base = _site_base(base_path)
    outputs: dict[str, PageOutput] = {}
    for permalink, page in frozen.items():
        logger.debug("Rendering page %s", permalink)
        outputs[permalink] = assemble_page(
            page, _render_path(permalink, page, base), frozen, options
        )
    return outputs


def render_all_pages(
    pages: Mapping[str, Page],
    base_path: SitePath | str = "/",
    options: RenderOptions | None = None,
    *,
    emitter: DiagnosticEmitter | None = None,
    keep_going: bool = False,
) -> dict[str, str]:
    """Render every page and key the documents by their absolute output file path.

    With ``keep_going`` a page that fails to render is reported through
    ``emitter`` and left out of the result; otherwise the first failure
    propagates. Conflicting output modes always raise before any page renders.
    """
    emitter = ensure_emitter(emitter)
    options = ensure_single_mode(options or RenderOptions())
    frozen = freeze_pages(pages)
    base = _site_base(base_path)
    files: dict[str, str] = {}

    for permalink, page in frozen.items():
        try:
            output = assemble_page(page, _render_path(permalink, page, base), frozen, options)
            target = to_path(permalink).plus(output.filename).abs()
        except PageRenderingError as exc:
            if not keep_going:
                raise
            emitter.error(f"Failed to render page {permalink}", exc)
            emitter.event("page_failed", {"permalink": permalink, "reason": exception_hint(exc)})
            continue

        files[target] = output.text
        emitter.event(
            "page_rendered", {"permalink": permalink, "output": target, "type": output.type}
        )

    return files


def _site_base(base_path: SitePath | str) -> SitePath:
    base = to_path(base_path)
    if not isinstance(base, SitePath):
        raise PageRenderingError("The deployment root cannot be a masked path")
    return base


__all__ = [
    "ALTERNATE_STATUS_PREAMBLE",
    "OUTPUT_FILENAMES",
    "PREVIEW_CSS",
    "PREVIEW_JS",
    "PageOutput",
    "assemble_page",
    "render_all_pages",
    "render_pages",
]
