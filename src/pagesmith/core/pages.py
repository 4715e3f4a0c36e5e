"""Page records and the registry mapping absolute paths to pages."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
import logging
from types import MappingProxyType
from typing import TypeAlias

from .exceptions import InvalidOperationError
from .paths import SitePath, to_path
from .snippets import Snippet


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Page:
    """A page of the site with its content and metadata snippets.

    ``name`` labels the page wherever other pages link to it by name, ``title``
    fills the ``<title>`` element and ``body`` is the page content. Pages with
    ``uses_absolute`` set are rendered with host-rooted links so they keep
    working from any request path (error pages, typically).
    """

    permalink: SitePath
    uses_absolute: bool
    is_404: bool
    name: Snippet
    title: Snippet
    icon: SitePath
    body: Snippet


PageRegistry: TypeAlias = dict[str, Page]


def _site_path(value: SitePath | str) -> SitePath:
    path = to_path(value)
    if not isinstance(path, SitePath):
        raise InvalidOperationError("Pages cannot be declared at a masked path")
    return path


def make_page(
    permalink: SitePath | str,
    *,
    name: Snippet,
    title: Snippet,
    icon: SitePath | str,
    body: Snippet,
    uses_absolute: bool = False,
    is_404: bool = False,
) -> Page:
    """Build a :class:`Page`, parsing string paths."""
    return Page(
        permalink=_site_path(permalink),
        uses_absolute=uses_absolute,
        is_404=is_404,
        name=name,
        title=title,
        icon=_site_path(icon),
        body=body,
    )


def define_page(pages: MutableMapping[str, Page], page: Page) -> None:
    """Register ``page`` under its absolute permalink; later definitions win."""
    key = page.permalink.abs()
    if key in pages:
        logger.debug("Replacing page previously defined at %s", key)
    pages[key] = page


def freeze_pages(pages: Mapping[str, Page]) -> Mapping[str, Page]:
    """Return a read-only snapshot of the registry used during rendering."""
    return MappingProxyType(dict(pages))


__all__ = ["Page", "PageRegistry", "define_page", "freeze_pages", "make_page"]
