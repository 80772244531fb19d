"""Front matter parsing for Belong.

A page may begin with a TOML block fenced by ``+++`` lines::

    +++
    title = "Hello World!"
    date = "2020-03-21"
    +++
    The page body...

The block is optional. When present it must parse as TOML and the recognized
fields must have the right types, otherwise a ``FrontMatterError`` is raised.
Unrecognized keys are kept in ``FrontMatter.rest`` so that a page can be
serialized back without losing anything.
"""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass, field
from typing import Any

import tomlkit

from .errors import FrontMatterError, StructuredDataError
from .utils import load_toml, toml_type_name

# Greedy on purpose: the block closes at the last `+++` line of the document.
FRONT_MATTER_RE = re.compile(r"\A\s*\+\+\+(.*)\+\+\+(?:\r?\n)+(.*)\Z", re.DOTALL)

DATE_FORMAT = "%Y-%m-%d"


def _pop_string(data: dict[str, Any], key: str) -> str | None:
    value = data.pop(key, None)
    if value is not None and not isinstance(value, str):
        raise StructuredDataError(
            f"invalid type: {toml_type_name(value)}, expected a string for key `{key}`"
        )
    return value


def _pop_date(data: dict[str, Any], key: str) -> dt.date | None:
    value = data.pop(key, None)
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        raise StructuredDataError(
            f"invalid type: {toml_type_name(value)}, expected a calendar date for key `{key}`"
        )
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.datetime.strptime(value, DATE_FORMAT).date()
        except ValueError:
            raise StructuredDataError(
                f"invalid value: {value!r}, expected a calendar date (YYYY-MM-DD) for key `{key}`"
            ) from None
    raise StructuredDataError(
        f"invalid type: {toml_type_name(value)}, expected a calendar date for key `{key}`"
    )


@dataclass(frozen=True)
class FrontMatter:
    """Metadata of a single page.

    Attributes:
        title: The title for this page.
        description: A short description of this page.
        date: The date this page was written.
        kind: The type of page, e.g. "post".
        rest: Every other key found in the front matter block.
    """

    title: str | None = None
    description: str | None = None
    date: dt.date | None = None
    kind: str | None = None
    rest: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> FrontMatter:
        """Build front matter from a parsed TOML table.

        Raises:
            StructuredDataError: If a recognized field has the wrong type.
        """
        data = dict(data)
        title = _pop_string(data, "title")
        description = _pop_string(data, "description")
        when = _pop_date(data, "date")
        kind = _pop_string(data, "kind")
        return cls(
            title=title, description=description, date=when, kind=kind, rest=data
        )

    @classmethod
    def from_toml(cls, text: str) -> FrontMatter:
        return cls.from_mapping(load_toml(text))

    def to_mapping(self) -> dict[str, Any]:
        """Flatten the fields back into one table, recognized fields first."""
        data: dict[str, Any] = {}
        if self.title is not None:
            data["title"] = self.title
        if self.description is not None:
            data["description"] = self.description
        if self.date is not None:
            data["date"] = self.date.isoformat()
        if self.kind is not None:
            data["kind"] = self.kind
        data.update(self.rest)
        return data

    def to_toml(self) -> str:
        return tomlkit.dumps(self.to_mapping())

    def as_context(self) -> dict[str, Any]:
        """Return the template view of the front matter.

        Recognized fields are always present (``None`` when unset) and the
        date is rendered as an ISO string so templates can sort on it.
        """
        context: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat() if self.date is not None else None,
            "kind": self.kind,
        }
        context.update(self.rest)
        return context

    def __str__(self) -> str:
        return f"+++\n{self.to_toml()}+++\n"


@dataclass(frozen=True)
class RawPage:
    """A page document as stored on disk: front matter plus Markdown body."""

    front_matter: FrontMatter = field(default_factory=FrontMatter)
    contents: str = ""

    @classmethod
    def from_str(cls, text: str) -> RawPage:
        """Split a document into front matter and contents.

        Args:
            text: Raw document text.

        Returns:
            RawPage with default front matter when there is no ``+++`` block.

        Raises:
            FrontMatterError: If the block is present but invalid.
        """
        match = FRONT_MATTER_RE.match(text)
        if match is None:
            return cls(contents=text)
        try:
            front_matter = FrontMatter.from_toml(match.group(1))
        except StructuredDataError as exc:
            raise FrontMatterError("failed to parse front matter") from exc
        return cls(front_matter=front_matter, contents=match.group(2))

    def __str__(self) -> str:
        return f"{self.front_matter}\n{self.contents}"
