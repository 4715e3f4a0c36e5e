"""Paragraph grouping for parsed document content.

The markup parser hands a document over as a flat run of inline fragments
interleaved with snippets already marked as block-level. Every maximal run of
inline content becomes one ``<p>`` element; blocks pass through untouched.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .snippets import Block, Snippet, Tag, is_snippet


def flatten(fragments: Snippet | Iterable[Snippet]) -> Iterator[Snippet]:
    """Yield the non-sequence leaves of arbitrarily nested lists and tuples."""
    if isinstance(fragments, (list, tuple)):
        for fragment in fragments:
            yield from flatten(fragment)
    else:
        yield fragments


def _trim_run(run: list[Snippet]) -> list[Snippet]:
    """Strip leading and trailing whitespace from the text at the edges of ``run``."""
    trimmed = list(run)
    while trimmed and isinstance(trimmed[0], str):
        head = trimmed[0].lstrip()
        if head:
            trimmed[0] = head
            break
        trimmed.pop(0)
    while trimmed and isinstance(trimmed[-1], str):
        tail = trimmed[-1].rstrip()
        if tail:
            trimmed[-1] = tail
            break
        trimmed.pop()
    return trimmed


def group_paragraphs(fragments: Snippet | Iterable[Snippet]) -> list[Block]:
    """Wrap each run of non-block fragments in a paragraph block.

    Runs that are empty once trimmed produce nothing, so grouping content that
    consists only of blocks returns those blocks unchanged.
    """
    blocks: list[Block] = []
    pending: list[Snippet] = []

    def flush() -> None:
        run = _trim_run(pending)
        pending.clear()
        if run:
            blocks.append(Block(Tag("p", (), tuple(run))))

    items = fragments if is_snippet(fragments) else list(fragments)
    for fragment in flatten(items):
        if isinstance(fragment, Block):
            flush()
            blocks.append(fragment)
        else:
            pending.append(fragment)
    flush()
    return blocks


__all__ = ["flatten", "group_paragraphs"]
