"""Content loading for Belong.

This module discovers the Markdown files below a project's content directory
and loads each of them as a ``Page``.

Key classes:
- Page: Dataclass representing one Markdown page of the site.
- FileContentLoader: Discovers Markdown files in the content directory.
- ContentProcessor: Facade that loads every discovered file as a Page.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Any

from .errors import BelongError, BuildError
from .frontmatter import FrontMatter, RawPage
from .urls import path_to_root, url_path
from .utils import is_markdown, read_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Page:
    """A Markdown page of the site.

    Attributes:
        path: Location of the source file relative to the content directory.
        front_matter: Metadata parsed from the ``+++`` block.
        contents: Markdown body following the front matter.
    """

    path: PurePath
    front_matter: FrontMatter = field(default_factory=FrontMatter)
    contents: str = ""

    @property
    def url(self) -> str:
        return url_path(self.path)

    @property
    def path_to_root(self) -> str:
        return path_to_root(self.path)

    def context(self, content_html: str) -> dict[str, Any]:
        """Build the template context for this page.

        Args:
            content_html: The page contents already converted to HTML.

        Returns:
            Mapping with ``meta``, ``path``, ``url`` and ``content`` keys.
        """
        url = self.url
        return {
            "meta": self.front_matter.as_context(),
            "path": url,
            "url": url,
            "content": content_html,
        }


def load_page(src_dir: Path, full_path: Path) -> Page:
    """Load a single page from disk.

    Args:
        src_dir: The project's content directory.
        full_path: Path to the Markdown file inside ``src_dir``.

    Returns:
        Page keyed by its path relative to ``src_dir``.

    Raises:
        FileError: If the file cannot be read.
        FrontMatterError: If its front matter is invalid.
    """
    raw_page = RawPage.from_str(read_text(full_path))
    return Page(
        path=full_path.relative_to(src_dir),
        front_matter=raw_page.front_matter,
        contents=raw_page.contents,
    )


class FileContentLoader:
    """Discovers Markdown files in a content directory.

    Attributes:
        src_dir: Directory containing the site's Markdown content.
    """

    def __init__(self, src_dir: Path):
        self.src_dir = src_dir

    def iter_files(self) -> list[Path]:
        """Return every Markdown file below the content directory.

        Files are returned in sorted order so that repeated walks over the
        same tree agree with each other.

        Returns:
            List of paths to Markdown files.
        """
        if not self.src_dir.is_dir():
            logger.warning("content directory `%s` does not exist", self.src_dir)
            return []
        return sorted(
            path
            for path in self.src_dir.rglob("*")
            if is_markdown(path) and path.is_file()
        )


class ContentProcessor:
    """Loads every Markdown file of a content directory as a Page.

    Attributes:
        src_dir: Directory containing the site's Markdown content.
    """

    def __init__(self, src_dir: Path, content_loader: FileContentLoader | None = None):
        self.src_dir = src_dir
        self._content_loader = content_loader or FileContentLoader(src_dir)

    def load(self) -> list[Page]:
        """Load all pages.

        Returns:
            Pages in walk order.

        Raises:
            BuildError: Naming the first page that failed to load.
        """
        pages: list[Page] = []
        for path in self._content_loader.iter_files():
            try:
                page = load_page(self.src_dir, path)
            except BelongError as exc:
                raise BuildError(f"failed to load page `{path}`", path) from exc
            logger.debug("loaded page `%s`", page.path)
            pages.append(page)
        return pages
