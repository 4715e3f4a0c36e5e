from pagesmith.core.paragraphs import flatten, group_paragraphs
from pagesmith.core.snippets import Block, Tag


def _paragraph(*content):
    return Block(Tag("p", (), tuple(content)))


def test_inline_run_becomes_one_paragraph() -> None:
    assert group_paragraphs(["a", "b"]) == [_paragraph("a", "b")]


def test_blocks_split_runs_and_whitespace_is_trimmed() -> None:
    heading = Block(Tag("h1", (), ("Title",)))
    grouped = group_paragraphs(["  Hello", heading, " world  ", "   "])
    assert grouped == [_paragraph("Hello"), heading, _paragraph("world")]


def test_whitespace_only_runs_produce_nothing() -> None:
    assert group_paragraphs(["  ", "\n"]) == []
    assert group_paragraphs([]) == []


def test_nested_sequences_are_flattened() -> None:
    assert list(flatten([["a", ["b"]], ("c",)])) == ["a", "b", "c"]
    assert group_paragraphs([["a", ["b"]], Block("c")]) == [_paragraph("a", "b"), Block("c")]


def test_grouping_is_idempotent() -> None:
    grouped = group_paragraphs(["x ", Block("y"), Tag("em", (), "z"), " tail"])
    assert group_paragraphs(grouped) == grouped
