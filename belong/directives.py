"""Directive preprocessing for Belong pages.

Page contents may embed directives of the form ``{{ #name args }}``. They
are resolved before the Markdown is converted, replacing the directive with
the text it stands for. The only directive so far is ``include``, which
pulls in another file, optionally limited to a range of lines::

    {{ #include listing.py }}         the whole file
    {{ #include listing.py:5 }}       line 5 only
    {{ #include listing.py:5: }}      line 5 to the end of the file
    {{ #include listing.py::10 }}     lines 1 to 10
    {{ #include listing.py:5:10 }}    lines 5 to 10

Paths are relative to the directory of the page containing the directive.
Line numbers start at 1.

Unknown directives and directives with malformed arguments are logged and
left in the output as written. An ``include`` whose target cannot be read
fails the whole page.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, replace
from pathlib import Path, PurePath

from .content import Page
from .errors import BuildError, DirectiveError, FileError

logger = logging.getLogger(__name__)

DIRECTIVE_RE = re.compile(r"\{\{\s*#(?P<name>[a-zA-Z0-9_]+)\s+(?P<args>.*?)\s*\}\}")
LINE_NUMBER_RE = re.compile(r"[0-9]+")

INCLUDE = "include"


@dataclass(frozen=True)
class Directive:
    """One directive found in page contents.

    Attributes:
        name: Directive name without the leading ``#``.
        args: Argument string, stripped of surrounding whitespace.
        span: ``(start, end)`` offsets of the whole directive in the contents.
    """

    name: str
    args: str
    span: tuple[int, int]


def find_directives(contents: str) -> Iterator[Directive]:
    """Yield every directive in ``contents``, left to right."""
    for match in DIRECTIVE_RE.finditer(contents):
        yield Directive(
            name=match.group("name"),
            args=match.group("args").strip(),
            span=match.span(),
        )


def _parse_line_number(value: str, which: str) -> int:
    if not LINE_NUMBER_RE.fullmatch(value):
        raise DirectiveError(f"failed to parse {which} line number `{value}`")
    return int(value)


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass(frozen=True)
class LineRange:
    """A 0-based, end-exclusive range of lines.

    Attributes:
        start: Index of the first line to keep.
        end: Index one past the last line to keep, or None for end of file.
    """

    start: int = 0
    end: int | None = None

    @classmethod
    def parse(cls, spec: str | None) -> LineRange:
        """Parse a ``start[:end]`` line range using 1-based line numbers.

        Examples:
            >>> LineRange.parse("5")
            LineRange(start=4, end=5)
            >>> LineRange.parse("5:10")
            LineRange(start=4, end=10)
            >>> LineRange.parse(":10")
            LineRange(start=0, end=10)

        Raises:
            DirectiveError: If a line number is not a non-negative integer.
        """
        start_spec, colon, end_spec = (spec or "").partition(":")
        start = None
        if start_spec:
            start = max(_parse_line_number(start_spec, "start") - 1, 0)
        if start is None:
            if not colon:
                return cls()
            return cls(end=_parse_line_number(end_spec, "end"))
        if not colon:
            return cls(start=start, end=start + 1)
        if not end_spec:
            return cls(start=start)
        return cls(start=start, end=_parse_line_number(end_spec, "end"))

    def extract(self, text: str) -> str:
        """Return the selected lines of ``text`` joined with newlines."""
        return "\n".join(_lines(text)[self.start : self.end])


@dataclass(frozen=True)
class Include:
    """An ``include`` directive.

    Attributes:
        path: File to include, relative to the including page's directory.
        line_range: Lines of the file to include.
    """

    path: PurePath
    line_range: LineRange = LineRange()

    @classmethod
    def parse(cls, args: str) -> Include:
        """Parse ``path[:start[:end]]``.

        Raises:
            DirectiveError: If the path is empty or the range is malformed.
        """
        path, _, range_spec = args.partition(":")
        if not path:
            raise DirectiveError("missing include path")
        return cls(path=PurePath(path), line_range=LineRange.parse(range_spec))

    def read(self, page_dir: Path) -> str:
        """Read the included lines.

        Raises:
            FileError: If the file cannot be read.
        """
        path = page_dir / self.path
        try:
            contents = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FileError(f"failed to read from `{path}`", path) from exc
        return self.line_range.extract(contents)


def preprocess(contents: str, page_dir: Path) -> str:
    """Resolve every directive in ``contents``.

    Args:
        contents: Page contents.
        page_dir: Directory containing the page, for relative includes.

    Returns:
        The contents with each resolved directive replaced by its text.

    Raises:
        FileError: If an include target cannot be read.
    """
    pieces: list[str] = []
    previous_end = 0
    for directive in find_directives(contents):
        if directive.name != INCLUDE:
            logger.warning("unrecognized directive `%s`", directive.name)
            continue
        start, end = directive.span
        try:
            include = Include.parse(directive.args)
        except DirectiveError as exc:
            logger.warning(
                "failed to parse include directive `%s`: %s", contents[start:end], exc
            )
            continue
        pieces.append(contents[previous_end:start])
        pieces.append(include.read(page_dir))
        previous_end = end
    pieces.append(contents[previous_end:])
    return "".join(pieces)


def preprocess_page(page: Page, src_dir: Path) -> Page:
    """Return a copy of ``page`` with its directives resolved.

    Args:
        page: The page to preprocess.
        src_dir: The project's content directory.

    Raises:
        BuildError: If an include target of the page cannot be read.
    """
    page_dir = (src_dir / page.path).parent
    try:
        contents = preprocess(page.contents, page_dir)
    except FileError as exc:
        raise BuildError(f"failed to preprocess page `{page.path}`", page.path) from exc
    return replace(page, contents=contents)
