"""High-level snippet renderer based on the rule engine."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pagesmith.core.config import RenderOptions
from pagesmith.core.context import HtmlResult, RenderContext, RenderState, TextResult
from pagesmith.core.paths import ROOT_PATH, MaskedPath, SitePath, to_path
from pagesmith.core.rules import RenderEngine, RenderOperation
from pagesmith.core.snippets import Snippet


class SnippetRenderer:
    """Render snippet trees to HTML, title text and unstructured text."""

    def __init__(self) -> None:
        self.engine = RenderEngine()
        self._register_builtin_handlers()

    def _register_builtin_handlers(self) -> None:
        """Register the handlers covering every built-in snippet variant."""
        from ..handlers import (
            basic as basic_handlers,
            composed as composed_handlers,
            links as link_handlers,
            text as text_handlers,
        )

        self.engine.collect_from(basic_handlers)
        self.engine.collect_from(link_handlers)
        self.engine.collect_from(composed_handlers)
        self.engine.collect_from(text_handlers)

    def register(self, handler: Any) -> None:
        """Register additional handlers on demand.

        Arguments can be callables decorated with :func:`renders` or modules/classes
        exposing decorated attributes.
        """
        definition = getattr(handler, "__render_rule__", None)
        if definition is not None:
            self.engine.register(handler)
            return

        self.engine.collect_from(handler)

    def render_html(
        self,
        snippet: Snippet,
        path: SitePath | MaskedPath | str,
        state: RenderState | None = None,
        options: RenderOptions | None = None,
    ) -> HtmlResult:
        """Render ``snippet`` as HTML for a page located at ``path``."""
        context = RenderContext(self, to_path(path), options or RenderOptions())
        return self.dispatch_html(snippet, state or RenderState(), context)

    def render_title(self, snippet: Snippet) -> str:
        """Render ``snippet`` as the escaped text of a ``<title>`` element."""
        return self.dispatch_title(snippet, RenderContext(self, ROOT_PATH))

    def render_unstructured(
        self,
        snippet: Snippet,
        path: SitePath | MaskedPath | str,
        state: RenderState | None = None,
    ) -> TextResult:
        """Render ``snippet`` as raw text; callers escape the result themselves."""
        context = RenderContext(self, to_path(path))
        return self.dispatch_unstructured(snippet, state or RenderState(), context)

    def dispatch_html(
        self, snippet: Snippet, state: RenderState, context: RenderContext
    ) -> HtmlResult:
        return self.engine.dispatch(RenderOperation.HTML, snippet, state, context)

    def dispatch_title(self, snippet: Snippet, context: RenderContext) -> str:
        return self.engine.dispatch(RenderOperation.TITLE, snippet, context)

    def dispatch_unstructured(
        self, snippet: Snippet, state: RenderState, context: RenderContext
    ) -> TextResult:
        return self.engine.dispatch(RenderOperation.UNSTRUCTURED, snippet, state, context)


@lru_cache(maxsize=1)
def default_renderer() -> SnippetRenderer:
    """Return the shared renderer with the built-in handlers."""
    return SnippetRenderer()


def render_html(
    snippet: Snippet,
    path: SitePath | MaskedPath | str,
    state: RenderState | None = None,
    options: RenderOptions | None = None,
) -> HtmlResult:
    """Render ``snippet`` as HTML with the default renderer."""
    return default_renderer().render_html(snippet, path, state, options)


def render_title(snippet: Snippet) -> str:
    """Render ``snippet`` as title text with the default renderer."""
    return default_renderer().render_title(snippet)


def render_unstructured(
    snippet: Snippet,
    path: SitePath | MaskedPath | str,
    state: RenderState | None = None,
) -> TextResult:
    """Render ``snippet`` as unstructured text with the default renderer."""
    return default_renderer().render_unstructured(snippet, path, state)


__all__ = [
    "SnippetRenderer",
    "default_renderer",
    "render_html",
    "render_title",
    "render_unstructured",
]
