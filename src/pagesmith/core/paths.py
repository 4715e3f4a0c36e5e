"""Path algebra for the static site's directory tree.

Every page of a PageSmith site lives at a URL ending in ``/dir1/dir2/.../``
with ``/`` as the base case, so a location is modelled as a tuple of directory
segments plus a file segment (empty for a directory index). Links between pages
are emitted relative to the page being rendered, which keeps the output
browsable from any host prefix and from the local filesystem.

`SitePath`
: Immutable location. Supports concatenation (:meth:`SitePath.plus`), absolute
  rendering (:meth:`SitePath.abs`) and relativisation against another location
  (:meth:`SitePath.relative_from`).

`MaskedPath`
: A page reachable from arbitrary request paths (error pages, typically). Its
  links cannot be relative because the serving location is unknown when the
  page is rendered, so they resolve against a fixed deployment root instead.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import TypeAlias

from .exceptions import InvalidOperationError, InvalidPathError, NotADirectoryPathError


_INVALID_SEGMENT = re.compile(r"^\.?\.?$|[?#]")
_FILE_PART = r"[^/#?]*(?:[#?].*)?"
_ABSOLUTE_ROOT_FILE = re.compile(rf"/({_FILE_PART})", re.DOTALL)
_ABSOLUTE_NESTED = re.compile(rf"/((?:[^/?#]+/)*[^/?#]+)/({_FILE_PART})", re.DOTALL)
_RELATIVE_FILE = re.compile(_FILE_PART, re.DOTALL)
_RELATIVE_NESTED = re.compile(rf"((?:[^/?#]+/)*[^/?#]+)/({_FILE_PART})", re.DOTALL)


def _is_valid_segment(segment: object) -> bool:
    return isinstance(segment, str) and _INVALID_SEGMENT.search(segment) is None


def _relative_dirs(source: tuple[str, ...], target: tuple[str, ...]) -> str:
    """Return the ``../`` hops and directory names leading from ``source`` to ``target``."""
    common = 0
    for left, right in zip(source, target):
        if left != right:
            break
        common += 1
    remaining = target[common:]
    descent = "/".join(remaining) + "/" if remaining else ""
    return "../" * (len(source) - common) + descent


@dataclass(frozen=True, slots=True)
class SitePath:
    """Location inside the site: directory segments plus a file segment."""

    dirs: tuple[str, ...] = ()
    file: str = ""

    def __post_init__(self) -> None:
        dirs = tuple(self.dirs)
        for segment in dirs:
            if not _is_valid_segment(segment):
                raise InvalidPathError(f"Invalid directory segment {segment!r}")
        if not isinstance(self.file, str):
            raise InvalidPathError(f"Invalid file segment {self.file!r}")
        object.__setattr__(self, "dirs", dirs)

    def __str__(self) -> str:
        return self.abs()

    @property
    def is_directory(self) -> bool:
        """Return True when the path designates a directory index."""
        return self.file == ""

    def plus(self, child: SitePath | str) -> SitePath:
        """Append ``child`` below this directory, adopting the child's file segment."""
        if self.file != "":
            raise NotADirectoryPathError(
                f"Cannot append a path to '{self.abs()}' because it is not a directory"
            )
        resolved = child if isinstance(child, SitePath) else to_path(child, ROOT_PATH)
        if not isinstance(resolved, SitePath):
            raise InvalidOperationError("Cannot append a masked path to another path")
        return SitePath(self.dirs + resolved.dirs, resolved.file)

    def abs(self) -> str:
        """Return the host-rooted form of the path."""
        return "".join(f"/{segment}" for segment in self.dirs) + "/" + self.file

    def relative_from(self, base: SitePath | MaskedPath) -> str:
        """Return a reference to this path usable from a page rendered at ``base``.

        Plain bases produce a relative reference. Masked bases produce a
        host-rooted reference anchored at the masked deployment root.
        """
        if isinstance(base, MaskedPath):
            return base.base_path.plus(self).abs()
        return _relative_dirs(base.dirs, self.dirs) + self.file

    def link_would_be_redundant(self, base: SitePath | MaskedPath) -> bool:
        """Return True when linking to this path from ``base`` would be a self-link."""
        if isinstance(base, MaskedPath):
            return self.link_would_be_redundant(base.real_path)
        return self.dirs == base.dirs and self.file == base.file

    def family_dirs(self) -> list[SitePath]:
        """Return every directory containing this path, root first."""
        return [SitePath(self.dirs[:depth], "") for depth in range(len(self.dirs) + 1)]

    def to_base_tag_suffix(self) -> str:
        """Return the host-relative suffix used when emitting a preview ``<base>`` tag."""
        return self.relative_from(ROOT_PATH)


@dataclass(frozen=True, slots=True)
class MaskedPath:
    """A real page location whose links resolve against a fixed deployment root."""

    real_path: SitePath
    base_path: SitePath

    def _refuse(self, operation: str) -> InvalidOperationError:
        return InvalidOperationError(f"A masked path does not support '{operation}'")

    def plus(self, child: SitePath | str) -> SitePath:
        raise self._refuse("plus")

    def abs(self) -> str:
        raise self._refuse("abs")

    def relative_from(self, base: SitePath | MaskedPath) -> str:
        raise self._refuse("relative_from")

    def link_would_be_redundant(self, base: SitePath | MaskedPath) -> bool:
        raise self._refuse("link_would_be_redundant")

    def family_dirs(self) -> list[SitePath]:
        raise self._refuse("family_dirs")

    def to_base_tag_suffix(self) -> str:
        """Return the deployment root's own ``<base>`` suffix."""
        return self.base_path.to_base_tag_suffix()


RenderPath: TypeAlias = SitePath | MaskedPath

ROOT_PATH = SitePath()


def _build(dirs: list[str] | tuple[str, ...], file: str) -> SitePath | None:
    if not all(_is_valid_segment(segment) for segment in dirs):
        return None
    return SitePath(tuple(dirs), file)


def parse_path(text: str, base: SitePath | MaskedPath | str | None = None) -> SitePath | None:
    """Parse ``text`` into a site path, returning ``None`` when it cannot be parsed.

    Absolute forms (``/a/b/file?query``) are always accepted. When ``base`` is
    provided, relative forms are resolved against its directories, with each
    leading ``../`` removing one directory. Popping past the root, and masked
    bases, yield ``None``.
    """
    if not isinstance(text, str):
        return None

    match = _ABSOLUTE_ROOT_FILE.fullmatch(text)
    if match:
        return _build((), match.group(1))
    match = _ABSOLUTE_NESTED.fullmatch(text)
    if match:
        return _build(match.group(1).split("/"), match.group(2))

    if base is None:
        return None
    anchor = parse_path(base) if isinstance(base, str) else base
    if not isinstance(anchor, SitePath):
        return None

    dirs = list(anchor.dirs)
    rest = text
    while True:
        if rest.startswith("../"):
            if not dirs:
                return None
            dirs.pop()
            rest = rest[3:]
        elif rest.startswith("./"):
            rest = rest[2:]
        else:
            break

    match = _RELATIVE_FILE.fullmatch(rest)
    if match:
        return _build(dirs, match.group(0))
    match = _RELATIVE_NESTED.fullmatch(rest)
    if match:
        return _build(dirs + match.group(1).split("/"), match.group(2))
    return None


def to_path(
    value: SitePath | MaskedPath | str, base: SitePath | MaskedPath | str | None = None
) -> SitePath | MaskedPath:
    """Coerce ``value`` to a path, raising :class:`InvalidPathError` when impossible."""
    if isinstance(value, (SitePath, MaskedPath)):
        return value
    if isinstance(value, str):
        parsed = parse_path(value, base)
        if parsed is None:
            raise InvalidPathError(f"Cannot parse site path {value!r}")
        return parsed
    raise TypeError(f"Expected a site path or string, got {type(value).__name__}")


def mask_path(real_path: SitePath | str, base_path: SitePath | str) -> MaskedPath:
    """Build a :class:`MaskedPath` from plain paths or their string forms."""
    real = to_path(real_path)
    base = to_path(base_path)
    if not isinstance(real, SitePath) or not isinstance(base, SitePath):
        raise InvalidOperationError("Masked paths cannot be nested")
    return MaskedPath(real, base)


__all__ = [
    "ROOT_PATH",
    "MaskedPath",
    "RenderPath",
    "SitePath",
    "mask_path",
    "parse_path",
    "to_path",
]
