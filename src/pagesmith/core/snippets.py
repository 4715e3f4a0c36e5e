"""Snippet node types making up page content trees.

Snippets form a closed set of variants. Plain ``str`` values are the String
variant and ``list``/``tuple`` values are the Sequence variant; every other
variant is one of the frozen dataclasses below. Each variant supports a subset
of the three render operations (HTML, title, unstructured), as declared by the
rules registered on :class:`pagesmith.adapters.html.renderer.SnippetRenderer`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
import re
from typing import TYPE_CHECKING, Any, TypeAlias

from .context import HtmlResult
from .dependencies import Dependency, EmbeddedDependency, include_once_js
from .exceptions import InvalidOperationError, InvalidTagError
from .paths import SitePath, to_path


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .context import RenderContext, RenderState


_TAG_NAME = re.compile(r"[-:a-z][-:a-z0-9]*")
_ATTRIBUTE_NAME = re.compile(r"[-:a-z]*")


def _coerce_site_path(value: SitePath | str) -> SitePath:
    path = to_path(value)
    if not isinstance(path, SitePath):
        raise InvalidOperationError("Snippets cannot link to a masked path")
    return path


@dataclass(frozen=True, slots=True)
class Tag:
    """HTML element with ordered attributes and a body snippet.

    Attribute values are either a :class:`SitePath`, rendered relative to the
    page, or a snippet rendered as unstructured text and attribute-escaped.
    """

    name: str
    attrs: tuple[tuple[str, Any], ...] = ()
    body: Snippet = ()

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not _TAG_NAME.fullmatch(self.name):
            raise InvalidTagError(f"HTML tag name is not acceptable: {self.name!r}")
        attrs = tuple((name, value) for name, value in self.attrs)
        seen: set[str] = set()
        for name, _value in attrs:
            if not isinstance(name, str) or not _ATTRIBUTE_NAME.fullmatch(name):
                raise InvalidTagError(f"Attribute name is not acceptable: {name!r}")
            if name in seen:
                raise InvalidTagError(f"Attribute '{name}' appears twice on <{self.name}>")
            seen.add(name)
        object.__setattr__(self, "attrs", attrs)


@dataclass(frozen=True, slots=True)
class Block:
    """Wrapper marking content as block-level for paragraph grouping."""

    content: Snippet


@dataclass(frozen=True, slots=True)
class NavLink:
    """Link to another page of the site, omitted when it targets the current page."""

    target: SitePath
    content: Snippet

    def __post_init__(self) -> None:
        object.__setattr__(self, "target", _coerce_site_path(self.target))


@dataclass(frozen=True, slots=True)
class NameNavLink:
    """Link to another page labelled with that page's registered name."""

    target: SitePath

    def __post_init__(self) -> None:
        object.__setattr__(self, "target", _coerce_site_path(self.target))


@dataclass(frozen=True, slots=True)
class RawHtml:
    """Pre-escaped HTML inserted verbatim."""

    html: str


@dataclass(frozen=True, slots=True)
class Deps:
    """Invisible snippet declaring script and stylesheet dependencies."""

    js: tuple[Dependency, ...] = ()
    css: tuple[Dependency, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "js", tuple(self.js))
        object.__setattr__(self, "css", tuple(self.css))


DependencyGenerator: TypeAlias = (
    "Callable[[RenderState, RenderContext], tuple[RenderState, Dependency]]"
)
HtmlGenerator: TypeAlias = "Callable[[RenderState, RenderContext], HtmlResult]"


@dataclass(frozen=True, slots=True)
class Composed:
    """Snippet assembled from generators sharing one per-instance token.

    Rendering allocates a fresh token, then calls every script generator, every
    stylesheet generator and finally every HTML generator, each with the token
    on top of the state's token stack.
    """

    js: tuple[DependencyGenerator, ...] = ()
    css: tuple[DependencyGenerator, ...] = ()
    html: tuple[HtmlGenerator, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "js", tuple(self.js))
        object.__setattr__(self, "css", tuple(self.css))
        object.__setattr__(self, "html", tuple(self.html))


@dataclass(frozen=True, slots=True)
class Token:
    """Placeholder replaced by the token of the enclosing composed snippet."""


Snippet: TypeAlias = (
    "str | list[Snippet] | tuple[Snippet, ...] | Tag | Block | NavLink | NameNavLink"
    " | RawHtml | Deps | Composed | Token"
)

SNIPPET_VARIANTS: dict[str, tuple[type, ...]] = {
    "String": (str,),
    "Sequence": (list, tuple),
    "Tag": (Tag,),
    "Block": (Block,),
    "NavLink": (NavLink,),
    "NameNavLink": (NameNavLink,),
    "RawHtml": (RawHtml,),
    "Deps": (Deps,),
    "Composed": (Composed,),
    "Token": (Token,),
}

SNIPPET_TYPES: tuple[type, ...] = tuple(
    kind for kinds in SNIPPET_VARIANTS.values() for kind in kinds
)


def is_snippet(value: object) -> bool:
    """Return True when ``value`` is one of the snippet variants."""
    return isinstance(value, SNIPPET_TYPES)


def variant_name(value: object) -> str:
    """Return the variant name of a snippet, or its type name otherwise."""
    for name, kinds in SNIPPET_VARIANTS.items():
        if isinstance(value, kinds):
            return name
    return type(value).__name__


def tag(name: str, *attrs: tuple[str, Any]) -> Callable[..., Tag]:
    """Return a builder wrapping its positional arguments in a ``name`` element.

    >>> tag("a", ("class", "external-link"))("Example").name
    'a'
    """
    attributes = tuple(attrs)

    def build(*body: Snippet) -> Tag:
        return Tag(name, attributes, body)

    return build


def block(content: Snippet) -> Block:
    return Block(content)


def with_deps(
    body: Snippet,
    *,
    js: Iterable[Dependency] = (),
    css: Iterable[Dependency] = (),
) -> list[Snippet]:
    """Attach dependencies to ``body`` without affecting paragraph grouping."""
    return [Block(Deps(tuple(js), tuple(css))), body]


def _include_once_generator(url: SitePath | str) -> DependencyGenerator:
    bundle = include_once_js(url)

    def generate(state: RenderState, context: RenderContext) -> tuple[RenderState, Dependency]:
        return state, bundle

    return generate


def _embedded_generator(source: Snippet) -> DependencyGenerator:
    def generate(state: RenderState, context: RenderContext) -> tuple[RenderState, Dependency]:
        rendered = context.unstructured(source, state)
        return rendered.state, EmbeddedDependency(rendered.text)

    return generate


def _manual_html_generator(source: Snippet) -> HtmlGenerator:
    def generate(state: RenderState, context: RenderContext) -> HtmlResult:
        rendered = context.unstructured(source, state)
        return HtmlResult(rendered.state, rendered.text)

    return generate


def _snippet_html_generator(content: Snippet) -> HtmlGenerator:
    def generate(state: RenderState, context: RenderContext) -> HtmlResult:
        return context.html(content, state)

    return generate


def composed(*details: Mapping[str, Any], **more: Any) -> Composed:
    """Build a :class:`Composed` snippet from keyword entries, in order.

    Recognised keys:

    ``include_once_js``
    : URL (or list of URLs) of a script shared site-wide.
    ``manual_js`` / ``manual_css``
    : unstructured snippet producing embedded script or style code.
    ``manual_html``
    : unstructured snippet producing raw HTML.
    ``snippet_html``
    : snippet rendered to HTML.

    Pass several mappings to declare more than one entry of the same kind.
    """
    js: list[DependencyGenerator] = []
    css: list[DependencyGenerator] = []
    html: list[HtmlGenerator] = []

    def process(key: str, value: Any) -> None:
        if key == "include_once_js":
            urls = value if isinstance(value, (list, tuple)) else [value]
            js.extend(_include_once_generator(url) for url in urls)
        elif key == "manual_js":
            js.append(_embedded_generator(value))
        elif key == "manual_css":
            css.append(_embedded_generator(value))
        elif key == "manual_html":
            html.append(_manual_html_generator(value))
        elif key == "snippet_html":
            html.append(_snippet_html_generator(value))
        else:
            raise TypeError(f"Unrecognised composed snippet entry '{key}'")

    for detail in (*details, more):
        for key, value in detail.items():
            process(key, value)
    return Composed(tuple(js), tuple(css), tuple(html))


__all__ = [
    "SNIPPET_TYPES",
    "SNIPPET_VARIANTS",
    "Block",
    "Composed",
    "Deps",
    "NameNavLink",
    "NavLink",
    "RawHtml",
    "Snippet",
    "Tag",
    "Token",
    "block",
    "composed",
    "is_snippet",
    "tag",
    "variant_name",
    "with_deps",
]
