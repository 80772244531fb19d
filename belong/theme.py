"""Theme loading for Belong.

A theme is the set of templates and stylesheets used to render a project.
Belong ships a default theme inside the package; a project may override any
of its files by placing a file at the same relative path in its ``theme/``
directory::

    theme/
        templates/base.html
        templates/index.html
        templates/page.html
        css/custom.css

Files missing from the project's theme directory fall back to the defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from .errors import FileError
from .utils import read_text

# Path to the default theme shipped with the package
_DEFAULT_THEME_DIR = Path(__file__).parent / "default_theme"

TEMPLATES_DIR = "templates"
STYLESHEETS_DIR = "css"

TEMPLATE_NAMES = ("base.html", "index.html", "page.html")
STYLESHEET_NAMES = ("custom.css",)


def default_contents(relative_path: PurePosixPath) -> str:
    """Return the contents of a default theme file.

    Args:
        relative_path: Path relative to the theme directory.

    Returns:
        File contents.
    """
    return read_text(_DEFAULT_THEME_DIR / relative_path)


def _load_files(theme_dir: Path, sub_dir: str, names: tuple[str, ...]):
    files: list[tuple[PurePosixPath, str]] = []
    for name in names:
        relative_path = PurePosixPath(sub_dir, name)
        path = theme_dir / relative_path
        try:
            contents = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            contents = default_contents(relative_path)
        except (OSError, UnicodeDecodeError) as exc:
            raise FileError("failed to read file", path) from exc
        files.append((relative_path, contents))
    return files


@dataclass(frozen=True)
class Theme:
    """The resolved templates and stylesheets of a project.

    Attributes:
        templates: ``(name, contents)`` pairs, e.g. ``("page.html", ...)``.
        stylesheets: ``(relative path, contents)`` pairs, e.g.
            ``(PurePosixPath("css/custom.css"), ...)``.
    """

    templates: tuple[tuple[str, str], ...]
    stylesheets: tuple[tuple[PurePosixPath, str], ...]

    @classmethod
    def from_path(cls, theme_dir: Path) -> Theme:
        """Load a theme, preferring files found in ``theme_dir``.

        A missing ``theme_dir`` is not an error: the default theme is used.

        Args:
            theme_dir: The project's theme directory.

        Returns:
            Theme with exactly one entry per well-known file, in a fixed order.

        Raises:
            FileError: If an override exists but cannot be read.
        """
        templates = _load_files(theme_dir, TEMPLATES_DIR, TEMPLATE_NAMES)
        stylesheets = _load_files(theme_dir, STYLESHEETS_DIR, STYLESHEET_NAMES)
        return cls(
            templates=tuple((path.name, contents) for path, contents in templates),
            stylesheets=tuple(stylesheets),
        )

    @classmethod
    def default(cls) -> Theme:
        return cls.from_path(_DEFAULT_THEME_DIR)

    def template(self, name: str) -> str:
        """Return the contents of the template called ``name``."""
        return dict(self.templates)[name]
