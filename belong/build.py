"""Site building functionality for Belong.

This module contains the core logic for building a static site from a
project directory. A build runs in three steps:

1. Load: read ``belong.toml``, the theme and every Markdown page below
   ``src/`` into a ``Project``.
2. Preprocess: resolve the directives embedded in each page.
3. Render: recreate the output directory, render every page through the
   ``page.html`` template, the site index through ``index.html``, and copy
   the theme's stylesheets.

Any failure aborts the build. Errors are wrapped at each step so that the
reported chain names the file involved and ends at the root cause.

Key functions:
- build_site: Load, preprocess and render a project.
- render_project: Write a loaded project to its output directory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path, PurePath

from markupsafe import Markup

from .config import CONFIG_FILE, CONTENT_DIR, OUTPUT_DIR, THEME_DIR, Config, load_config
from .content import ContentProcessor, Page
from .directives import preprocess_page
from .errors import BelongError, BuildError, FileError, TemplateRenderError
from .protocols import MarkdownConverter, TemplateRenderer
from .renderers import MarkdownRenderer
from .templates import TemplateEngine
from .theme import Theme
from .utils import recreate_dir, write_file

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = "page.html"
INDEX_TEMPLATE = "index.html"
INDEX_FILE = "index.html"


@dataclass(frozen=True)
class Project:
    """A project loaded into memory.

    Attributes:
        root_dir: The project's root directory.
        config: Configuration from ``belong.toml``.
        theme: Templates and stylesheets used for rendering.
        pages: Every page of the project, in walk order.
    """

    root_dir: Path
    config: Config = field(default_factory=Config)
    theme: Theme = field(default_factory=Theme.default)
    pages: list[Page] = field(default_factory=list)

    @property
    def src_dir(self) -> Path:
        return self.root_dir / CONTENT_DIR

    @property
    def theme_dir(self) -> Path:
        return self.root_dir / THEME_DIR

    @property
    def output_dir(self) -> Path:
        return self.root_dir / OUTPUT_DIR

    @classmethod
    def from_path(cls, root_dir: Path) -> Project:
        """Load a project from a directory.

        Args:
            root_dir: Root directory of the project.

        Returns:
            The loaded, not yet preprocessed, project.

        Raises:
            BuildError: If the config, theme or any page fails to load.
        """
        config_file = root_dir / CONFIG_FILE
        try:
            config = load_config(root_dir)
        except BelongError as exc:
            raise BuildError(f"failed to load config `{config_file}`", config_file) from exc

        theme_dir = root_dir / THEME_DIR
        try:
            theme = Theme.from_path(theme_dir)
        except BelongError as exc:
            raise BuildError("failed to load theme", theme_dir) from exc

        pages = ContentProcessor(root_dir / CONTENT_DIR).load()
        return cls(root_dir=root_dir, config=config, theme=theme, pages=pages)

    def preprocess(self) -> Project:
        """Return the project with every page's directives resolved.

        Raises:
            BuildError: If a page includes a file that cannot be read.
        """
        pages = [preprocess_page(page, self.src_dir) for page in self.pages]
        return replace(self, pages=pages)


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        pages: List of all pages in the site.
        output_dir: Directory where the site was built.
        files: Every file written, in write order.
    """

    pages: list[Page]
    output_dir: Path
    files: list[Path] = field(default_factory=list)


def _render(
    engine: TemplateRenderer, name: str, context: dict, message: str, path: PurePath
) -> str:
    try:
        return engine.render(name, context)
    except Exception as exc:
        raise TemplateRenderError(message, path) from exc


def _write(target: Path, contents: str, message: str, path: PurePath) -> None:
    try:
        write_file(target, contents)
    except FileError as exc:
        raise BuildError(message, path) from exc
    logger.debug("wrote `%s`", target)


def render_project(
    project: Project,
    output_dir: Path | None = None,
    markdown: MarkdownConverter | None = None,
    engine: TemplateRenderer | None = None,
) -> BuildResult:
    """Render a project into its output directory.

    The output directory is deleted and recreated first, so nothing from a
    previous build survives.

    Args:
        project: A loaded and preprocessed project.
        output_dir: Optional directory to write to instead of ``public/``.
        markdown: Optional Markdown converter, defaults to MarkdownRenderer.
        engine: Optional template renderer, defaults to the theme's
            TemplateEngine.

    Returns:
        BuildResult listing the written files.

    Raises:
        BuildError: If the output directory or a file cannot be written.
        TemplateRenderError: If a template fails to render.
    """
    output_dir = output_dir or project.output_dir
    try:
        recreate_dir(output_dir)
    except FileError as exc:
        raise BuildError(
            f"failed to recreate output directory `{output_dir}`", output_dir
        ) from exc

    markdown = markdown or MarkdownRenderer()
    engine = engine or TemplateEngine(project.theme)
    files: list[Path] = []

    base_ctx = {"config": project.config.as_context(), "path_to_root": ""}
    pages_ctx: list[dict] = []
    seen_urls: dict[str, PurePath] = {}

    for page in project.pages:
        try:
            this_ctx = page.context(Markup(markdown.render(page.contents)))
            page_ctx = {**base_ctx, "this": this_ctx, "path_to_root": page.path_to_root}
        except BelongError as exc:
            raise BuildError(
                f"failed to generate render context for page `{page.path}`", page.path
            ) from exc
        url = this_ctx["url"]
        if url in seen_urls:
            raise BuildError(
                f"pages `{seen_urls[url]}` and `{page.path}` both render to `{url}`",
                page.path,
            )
        seen_urls[url] = page.path
        pages_ctx.append(this_ctx)

        rendered = _render(
            engine, PAGE_TEMPLATE, page_ctx, f"failed to render page `{page.path}`", page.path
        )
        target = output_dir / url
        _write(target, rendered, f"failed to write page `{page.path}`", page.path)
        files.append(target)

    if INDEX_FILE in seen_urls:
        logger.warning(
            "page `%s` is overwritten by the site index `%s`",
            seen_urls[INDEX_FILE],
            INDEX_FILE,
        )

    index_ctx = {**base_ctx, "pages": pages_ctx}
    index_path = PurePath(INDEX_FILE)
    rendered = _render(
        engine, INDEX_TEMPLATE, index_ctx, f"failed to render page `{INDEX_FILE}`", index_path
    )
    target = output_dir / INDEX_FILE
    _write(target, rendered, f"failed to write page `{INDEX_FILE}`", index_path)
    files.append(target)

    for relative_path, contents in project.theme.stylesheets:
        target = output_dir / relative_path
        _write(target, contents, f"failed to write stylesheet `{relative_path}`", relative_path)
        files.append(target)

    return BuildResult(pages=list(project.pages), output_dir=output_dir, files=files)


def build_site(project_root: Path, output_dir_override: Path | None = None) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        output_dir_override: Optional path to write the build output to
            instead of ``public/``.

    Returns:
        BuildResult containing all pages and the written files.

    Raises:
        BelongError: On the first failure, with its causes chained.
    """
    project = Project.from_path(project_root).preprocess()
    logger.info("loaded %d pages from `%s`", len(project.pages), project.src_dir)
    result = render_project(project, output_dir=output_dir_override)
    logger.info("built %d pages into `%s`", len(result.pages), result.output_dir)
    return result
