"""JavaScript and CSS dependency descriptors and their tag rendering.

Snippets declare the scripts and stylesheets they need as side-channel output
of HTML rendering. The page assembler hands the collected descriptors to
:func:`render_js_dependencies` and :func:`render_css_dependencies`, which turn
them into tags relative to the page being rendered.

Include-once bundles are compared by identity: two bundles with the same
content created separately are distinct and both expand. Use
:func:`include_once_js` to share a single bundle per URL across the whole site.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging
import re
from threading import Lock
from typing import TypeAlias

from pagesmith.adapters.html.utils import escape_attribute

from .exceptions import InvalidDependencyError, InvalidEmbeddedCodeError
from .paths import MaskedPath, SitePath, to_path


logger = logging.getLogger(__name__)

_CLOSING_SEQUENCE = re.compile(r"<\s*[/!]")


@dataclass(frozen=True, slots=True)
class ExternalDependency:
    """Script or stylesheet loaded from another file of the site."""

    url: SitePath
    media: str | None = None

    def __post_init__(self) -> None:
        url = to_path(self.url)
        if not isinstance(url, SitePath):
            raise InvalidDependencyError("External dependencies cannot point at a masked path")
        object.__setattr__(self, "url", url)


@dataclass(frozen=True, slots=True)
class EmbeddedDependency:
    """Inline script or stylesheet code."""

    code: str
    media: str | None = None

    def __post_init__(self) -> None:
        match = _CLOSING_SEQUENCE.search(self.code)
        if match:
            raise InvalidEmbeddedCodeError(
                f"Embedded code must not contain the character sequence {match.group(0)!r}"
            )


@dataclass(frozen=True, slots=True)
class ConditionalDependency:
    """Dependency wrapped in an Internet Explorer conditional comment."""

    condition: str
    wrapped: Dependency


@dataclass(frozen=True, eq=False, slots=True)
class IncludeOnceBundle:
    """Group of JavaScript dependencies expanded at most once per page."""

    nested: tuple[Dependency, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "nested", tuple(self.nested))


Dependency: TypeAlias = (
    ExternalDependency | EmbeddedDependency | ConditionalDependency | IncludeOnceBundle
)


_INCLUDE_ONCE_JS: dict[str, IncludeOnceBundle] = {}
_INCLUDE_ONCE_LOCK = Lock()


def include_once_js(url: SitePath | str) -> IncludeOnceBundle:
    """Return the site-wide bundle loading the script at ``url``."""
    dependency = ExternalDependency(url)
    key = dependency.url.abs()
    with _INCLUDE_ONCE_LOCK:
        bundle = _INCLUDE_ONCE_JS.get(key)
        if bundle is None:
            bundle = IncludeOnceBundle((dependency,))
            _INCLUDE_ONCE_JS[key] = bundle
            logger.debug("Registered include-once script bundle for %s", key)
    return bundle


def _media_attribute(media: str | None) -> str:
    if media is None:
        return ""
    return f' media="{escape_attribute(media)}"'


def render_css_dependency(dependency: Dependency, path: SitePath | MaskedPath) -> str:
    """Render a single stylesheet dependency as seen from ``path``."""
    if isinstance(dependency, ExternalDependency):
        href = escape_attribute(dependency.url.relative_from(path))
        return f'<link rel="stylesheet"{_media_attribute(dependency.media)} href="{href}" />'
    if isinstance(dependency, EmbeddedDependency):
        return (
            f'<style{_media_attribute(dependency.media)} type="text/css">'
            f"{dependency.code}</style>"
        )
    if isinstance(dependency, ConditionalDependency):
        inner = render_css_dependency(dependency.wrapped, path)
        return f"<!--[if {dependency.condition}]>{inner}<![endif]-->"
    raise InvalidDependencyError(f"Invalid CSS dependency: {dependency!r}")


def render_js_dependency(dependency: Dependency, path: SitePath | MaskedPath) -> str:
    """Render a single script dependency as seen from ``path``."""
    if isinstance(dependency, ExternalDependency):
        src = escape_attribute(dependency.url.relative_from(path))
        return f'<script type="text/javascript" src="{src}"></script>'
    if isinstance(dependency, EmbeddedDependency):
        return f'<script type="text/javascript">{dependency.code}</script>'
    if isinstance(dependency, ConditionalDependency):
        inner = render_js_dependency(dependency.wrapped, path)
        return f"<!--[if {dependency.condition}]>{inner}<![endif]-->"
    raise InvalidDependencyError(f"Invalid JavaScript dependency: {dependency!r}")


def render_js_dependencies(
    dependencies: Iterable[Dependency], path: SitePath | MaskedPath
) -> list[str]:
    """Render script dependencies, expanding each include-once bundle a single time.

    Bundles expand depth-first at the position of their first occurrence. A
    bundle is marked as included before its contents expand.
    """
    rendered: list[str] = []
    included: set[IncludeOnceBundle] = set()

    def add(items: Iterable[Dependency]) -> None:
        for dependency in items:
            if isinstance(dependency, IncludeOnceBundle):
                if dependency in included:
                    continue
                included.add(dependency)
                add(dependency.nested)
            else:
                rendered.append(render_js_dependency(dependency, path))

    add(dependencies)
    return rendered


def render_css_dependencies(
    dependencies: Iterable[Dependency], path: SitePath | MaskedPath
) -> list[str]:
    """Render stylesheet dependencies in declaration order."""
    return [render_css_dependency(dependency, path) for dependency in dependencies]


__all__ = [
    "ConditionalDependency",
    "Dependency",
    "EmbeddedDependency",
    "ExternalDependency",
    "IncludeOnceBundle",
    "include_once_js",
    "render_css_dependencies",
    "render_css_dependency",
    "render_js_dependencies",
    "render_js_dependency",
]
