"""Custom exception hierarchy for the page rendering pipeline."""

from __future__ import annotations


class PageRenderingError(RuntimeError):
    """Base exception for page rendering failures."""


class InvalidPathError(PageRenderingError):
    """Raised when a site path is built from a malformed segment."""


class InvalidOperationError(PageRenderingError):
    """Raised when a masked path is used where only plain paths make sense."""


class NotADirectoryPathError(PageRenderingError):
    """Raised when a path with a file segment is extended with a child path."""


class UnsupportedOperationError(PageRenderingError):
    """Raised when a snippet variant does not support a render operation."""

    def __init__(self, variant: str, operation: str) -> None:
        super().__init__(f"Snippets of type '{variant}' do not support {operation} rendering")
        self.variant = variant
        self.operation = operation


class InvalidSnippetError(PageRenderingError, TypeError):
    """Raised when a value that is not a snippet reaches a render operation."""


class StateUnderflowError(PageRenderingError):
    """Raised when the render state token stack is popped or read while empty."""


class UnknownPageError(PageRenderingError):
    """Raised when a snippet refers to a page missing from the registry."""


class InvalidEmbeddedCodeError(PageRenderingError):
    """Raised when embedded script or style code could close its element early."""


class InvalidDependencyError(PageRenderingError):
    """Raised when a dependency descriptor is used where it cannot be rendered."""


class InvalidTagError(PageRenderingError):
    """Raised when an HTML tag or attribute name is not acceptable."""


class ConflictingRenderModesError(PageRenderingError):
    """Raised when more than one exclusive output mode is requested."""


class VocabularyError(PageRenderingError):
    """Raised when a markup vocabulary entry receives malformed arguments."""


class ConfigError(PageRenderingError):
    """Raised when a site configuration file cannot be loaded."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None
