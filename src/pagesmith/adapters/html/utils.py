"""Utility helpers specific to HTML rendering."""

from __future__ import annotations


_BASIC_HTML_ESCAPE_MAP = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\u2013": "&ndash;",
    "\u2014": "&mdash;",
    "\u00a9": "&copy;",
}

_ATTRIBUTE_ESCAPE_MAP = {
    **_BASIC_HTML_ESCAPE_MAP,
    '"': "&quot;",
    "'": "&#39;",
}


def escape_html(text: str) -> str:
    """Escape text content for insertion between HTML tags."""
    if not text:
        return text
    return "".join(_BASIC_HTML_ESCAPE_MAP.get(char, char) for char in text)


def escape_attribute(text: str) -> str:
    """Escape text for insertion inside a double-quoted attribute value."""
    if not text:
        return text
    return "".join(_ATTRIBUTE_ESCAPE_MAP.get(char, char) for char in text)


__all__ = ["escape_attribute", "escape_html"]
