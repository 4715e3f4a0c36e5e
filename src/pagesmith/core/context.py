"""Rendering context primitives shared across the page pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from .config import RenderOptions
from .exceptions import StateUnderflowError, UnknownPageError
from .paths import ROOT_PATH, MaskedPath, SitePath


if TYPE_CHECKING:  # pragma: no cover - typing only
    from pagesmith.adapters.html.renderer import SnippetRenderer

    from .dependencies import Dependency
    from .pages import Page
    from .snippets import Snippet


def _empty_pages() -> Mapping[str, Page]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class RenderState:
    """Immutable accumulator threaded through a render pass.

    Every render call receives a state and returns its successor. ``counter``
    feeds unique token allocation, ``token_stack`` holds the tokens of the
    composed snippets being rendered (innermost first), and ``pages`` is the
    read-only registry used to resolve links by page name.
    """

    counter: int = 0
    token_stack: tuple[str, ...] = ()
    pages: Mapping[str, Page] = field(default_factory=_empty_pages)

    def __post_init__(self) -> None:
        if self.counter < 0:
            raise ValueError("The render state counter cannot be negative")
        object.__setattr__(self, "token_stack", tuple(self.token_stack))
        if not isinstance(self.pages, MappingProxyType):
            object.__setattr__(self, "pages", MappingProxyType(dict(self.pages)))

    @classmethod
    def fresh(cls, pages: Mapping[str, Page] | None = None) -> RenderState:
        """Return the initial state for rendering one page."""
        return cls(counter=0, token_stack=(), pages=pages or {})

    def allocate_token(self) -> tuple[str, RenderState]:
        """Return a token unique within this render pass and the advanced state."""
        token = f"gs{self.counter}gs"
        return token, replace(self, counter=self.counter + 1)

    def push_token(self, token: str) -> RenderState:
        """Return a state whose token stack has ``token`` on top."""
        return replace(self, token_stack=(token, *self.token_stack))

    def pop_token(self) -> RenderState:
        """Return a state without the topmost token."""
        if not self.token_stack:
            raise StateUnderflowError("The token stack is empty, nothing to pop")
        return replace(self, token_stack=self.token_stack[1:])

    @property
    def current_token(self) -> str:
        """Return the token of the innermost composed snippet."""
        if not self.token_stack:
            raise StateUnderflowError("The token stack is empty, no token is in scope")
        return self.token_stack[0]

    def lookup_page(self, path: SitePath) -> Page:
        """Return the registered page at ``path``."""
        try:
            return self.pages[path.abs()]
        except KeyError:
            raise UnknownPageError(f"No page is registered at '{path.abs()}'") from None


@dataclass(frozen=True, slots=True)
class HtmlResult:
    """Output of HTML rendering: markup plus side-channel dependencies."""

    state: RenderState
    html: str = ""
    js: tuple[Dependency, ...] = ()
    css: tuple[Dependency, ...] = ()


@dataclass(frozen=True, slots=True)
class TextResult:
    """Output of unstructured rendering."""

    state: RenderState
    text: str = ""


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Shared context passed to every handler during rendering.

    The context carries what stays constant for a whole page: the renderer used
    for recursion, the path the page is rendered at and the output options.
    """

    renderer: SnippetRenderer
    path: SitePath | MaskedPath = ROOT_PATH
    options: RenderOptions = field(default_factory=RenderOptions)

    def html(self, snippet: Snippet, state: RenderState) -> HtmlResult:
        """Render a nested snippet to HTML."""
        return self.renderer.dispatch_html(snippet, state, self)

    def unstructured(self, snippet: Snippet, state: RenderState) -> TextResult:
        """Render a nested snippet to unescaped text."""
        return self.renderer.dispatch_unstructured(snippet, state, self)

    def title(self, snippet: Snippet) -> str:
        """Render a nested snippet as title text."""
        return self.renderer.dispatch_title(snippet, self)


__all__ = ["HtmlResult", "RenderContext", "RenderState", "TextResult"]
