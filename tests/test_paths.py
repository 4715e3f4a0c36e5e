import pytest

from pagesmith.core.exceptions import (
    InvalidOperationError,
    InvalidPathError,
    NotADirectoryPathError,
)
from pagesmith.core.paths import ROOT_PATH, MaskedPath, SitePath, mask_path, parse_path, to_path


@pytest.mark.parametrize(
    "text",
    ["/", "/index.html", "/a/", "/a/b/", "/a/b/page.html", "/a/b?x=1", "/a/#top"],
)
def test_absolute_paths_round_trip(text: str) -> None:
    path = parse_path(text)
    assert path is not None
    assert path.abs() == text


def test_parse_splits_directories_and_file() -> None:
    assert parse_path("/a/b/index.html") == SitePath(("a", "b"), "index.html")
    assert parse_path("/a/b") == SitePath(("a",), "b")
    assert parse_path("/") == ROOT_PATH


@pytest.mark.parametrize("text", ["a/", "", "//", "/a//b/", "/a/../", "/./"])
def test_invalid_absolute_paths_are_rejected(text: str) -> None:
    assert parse_path(text) is None


def test_relative_paths_need_a_base() -> None:
    base = to_path("/a/b/")
    assert parse_path("c/") is None
    assert parse_path("c/", base) == SitePath(("a", "b", "c"), "")
    assert parse_path("../x.css", base) == SitePath(("a",), "x.css")
    assert parse_path("./page.html", base) == SitePath(("a", "b"), "page.html")
    assert parse_path("../../../", base) is None


def test_parse_accepts_string_base() -> None:
    assert parse_path("../c/", "/a/b/") == SitePath(("a", "c"), "")


def test_invalid_segments_raise() -> None:
    with pytest.raises(InvalidPathError):
        SitePath(("..",))
    with pytest.raises(InvalidPathError):
        SitePath(("a?b",))
    with pytest.raises(InvalidPathError):
        SitePath(("",))


def test_to_path_errors() -> None:
    with pytest.raises(InvalidPathError):
        to_path("not-absolute/")
    with pytest.raises(TypeError):
        to_path(42)  # type: ignore[arg-type]


def test_plus_appends_below_directories() -> None:
    assert to_path("/a/").plus("b/index.html") == SitePath(("a", "b"), "index.html")
    assert ROOT_PATH.plus(SitePath(("x",), "")) == SitePath(("x",), "")
    with pytest.raises(NotADirectoryPathError):
        to_path("/a/page.html").plus("b/")


@pytest.mark.parametrize(
    ("target", "base", "expected"),
    [
        ("/a/c/", "/a/b/", "../c/"),
        ("/x.css", "/a/b/", "../../x.css"),
        ("/a/b/c/d.html", "/a/", "b/c/d.html"),
        ("/a/b/", "/a/b/", ""),
        ("/favicon.ico", "/", "favicon.ico"),
    ],
)
def test_relative_from(target: str, base: str, expected: str) -> None:
    assert to_path(target).relative_from(to_path(base)) == expected


@pytest.mark.parametrize(
    ("target", "base"),
    [
        ("/a/c/", "/a/b/"),
        ("/x.css", "/a/b/"),
        ("/a/b/c/d.html", "/a/"),
        ("/a/b/", "/a/b/"),
        ("/", "/deep/er/still/"),
    ],
)
def test_relative_from_resolves_back_to_target(target: str, base: str) -> None:
    target_path = to_path(target)
    base_path = to_path(base)
    assert parse_path(target_path.relative_from(base_path), base_path) == target_path


def test_link_redundancy() -> None:
    here = to_path("/a/")
    assert to_path("/a/").link_would_be_redundant(here)
    assert not to_path("/a/b/").link_would_be_redundant(here)
    assert not to_path("/a/index.html").link_would_be_redundant(here)


def test_family_dirs_lists_ancestors_root_first() -> None:
    assert to_path("/a/b/c.html").family_dirs() == [
        ROOT_PATH,
        SitePath(("a",), ""),
        SitePath(("a", "b"), ""),
    ]


def test_masked_path_delegates_only_as_base() -> None:
    masked = mask_path("/errors/404/", "/site/")
    assert isinstance(masked, MaskedPath)

    assert to_path("/style.css").relative_from(masked) == "/site/style.css"
    assert to_path("/").relative_from(masked) == "/site/"
    assert to_path("/errors/404/").link_would_be_redundant(masked)
    assert not to_path("/site/").link_would_be_redundant(masked)
    assert masked.to_base_tag_suffix() == "site/"

    for operation in (masked.abs, masked.family_dirs):
        with pytest.raises(InvalidOperationError):
            operation()
    with pytest.raises(InvalidOperationError):
        masked.plus("x/")
    with pytest.raises(InvalidOperationError):
        masked.relative_from(ROOT_PATH)
    with pytest.raises(InvalidOperationError):
        masked.link_would_be_redundant(ROOT_PATH)


def test_base_tag_suffix_of_plain_paths() -> None:
    assert ROOT_PATH.to_base_tag_suffix() == ""
    assert to_path("/a/b/").to_base_tag_suffix() == "a/b/"
