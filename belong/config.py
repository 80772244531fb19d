"""Project configuration for Belong.

The configuration lives in ``belong.toml`` at the project root. Only the
``[project]`` table is understood by Belong itself; every other table or key
is kept untouched in ``Config.rest`` and handed to templates as-is, so themes
and site-specific data can use the file freely::

    [project]
    title = "My Blog"
    authors = ["Jane Doe"]

    [social]
    mastodon = "@jane@example.social"

This module also defines where a project keeps its content, theme and output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit

from .errors import StructuredDataError
from .utils import load_toml, read_text, toml_type_name

CONFIG_FILE = "belong.toml"
CONTENT_DIR = "src"
THEME_DIR = "theme"
OUTPUT_DIR = "public"


@dataclass(frozen=True)
class ProjectConfig:
    """The ``[project]`` table.

    Attributes:
        title: The title of the project.
        authors: The project's authors.
    """

    title: str | None = None
    authors: list[str] | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> ProjectConfig:
        if not isinstance(data, dict):
            raise StructuredDataError(
                f"invalid type: {toml_type_name(data)}, expected a table for key `project`"
            )
        title = data.get("title")
        if title is not None and not isinstance(title, str):
            raise StructuredDataError(
                f"invalid type: {toml_type_name(title)}, expected a string for key `project.title`"
            )
        authors = data.get("authors")
        if authors is not None:
            if not isinstance(authors, list) or not all(
                isinstance(author, str) for author in authors
            ):
                raise StructuredDataError(
                    "invalid type: expected an array of strings for key `project.authors`"
                )
            authors = list(authors)
        return cls(title=title, authors=authors)

    def to_mapping(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.title is not None:
            data["title"] = self.title
        if self.authors is not None:
            data["authors"] = list(self.authors)
        return data


@dataclass(frozen=True)
class Config:
    """The whole configuration file.

    Attributes:
        project: The ``[project]`` table.
        rest: Every other key of the file.
    """

    project: ProjectConfig = field(default_factory=ProjectConfig)
    rest: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_toml(cls, text: str) -> Config:
        """Parse configuration text.

        Raises:
            StructuredDataError: If the text is not TOML or ``[project]`` is
                malformed.
        """
        data = load_toml(text)
        project = ProjectConfig.from_mapping(data.pop("project", {}))
        return cls(project=project, rest=data)

    def to_toml(self) -> str:
        data: dict[str, Any] = {"project": self.project.to_mapping()}
        data.update(self.rest)
        return tomlkit.dumps(data)

    def as_context(self) -> dict[str, Any]:
        """Return the template view of the configuration."""
        context: dict[str, Any] = {
            "project": {
                "title": self.project.title,
                "authors": self.project.authors,
            }
        }
        context.update(self.rest)
        return context


def load_config(root_dir: Path) -> Config:
    """Load ``belong.toml`` from a project directory.

    Args:
        root_dir: Root directory of the project.

    Returns:
        The parsed configuration, or the default one when the file is absent.

    Raises:
        FileError: If the file exists but cannot be read.
        StructuredDataError: If the file is malformed.
    """
    path = root_dir / CONFIG_FILE
    if not path.exists():
        return Config()
    return Config.from_toml(read_text(path))
