"""Project initialization for Belong.

``init_project`` lays out a new project in an existing directory::

    belong.toml          project title and authors
    .gitignore           ignores the output directory (optional)
    src/hello-world.md   a first post

Existing files are never overwritten.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import CONFIG_FILE, CONTENT_DIR, OUTPUT_DIR, Config, ProjectConfig
from .errors import FileError
from .frontmatter import FrontMatter, RawPage
from .utils import write_new

logger = logging.getLogger(__name__)

HELLO_WORLD_FILE = "hello-world.md"

HELLO_WORLD_CONTENTS = """\
Hello World! This is the first page on my site.

I wrote some Python code for the occasion:

```python
def main():
    print("Hello, world!")
```
"""


@dataclass
class InitOptions:
    """Settings for a new project.

    Attributes:
        root_dir: Directory to initialize.
        title: Title of the project.
        authors: Authors of the project.
        gitignore: Whether to create a ``.gitignore`` file.
    """

    root_dir: Path
    title: str | None = None
    authors: list[str] = field(default_factory=list)
    gitignore: bool = True

    def config(self) -> Config:
        return Config(
            project=ProjectConfig(title=self.title, authors=list(self.authors) or None)
        )


def hello_world_page(today: dt.date | None = None) -> RawPage:
    """Return the first post of a new project."""
    front_matter = FrontMatter(
        title="Hello World!",
        date=today or dt.date.today(),
        kind="post",
    )
    return RawPage(front_matter=front_matter, contents=HELLO_WORLD_CONTENTS)


def init_project(options: InitOptions) -> list[Path]:
    """Write the files of a new project to disk.

    Args:
        options: Where to create the project and what to put in it.

    Returns:
        The files created.

    Raises:
        FileError: If a directory cannot be created or a file already exists.
    """
    root_dir = options.root_dir
    src_dir = root_dir / CONTENT_DIR
    try:
        src_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileError(f"failed to create src directory `{src_dir}`", src_dir) from exc

    created: list[Path] = []
    if options.gitignore:
        gitignore = root_dir / ".gitignore"
        write_new(gitignore, f"{OUTPUT_DIR}\n")
        created.append(gitignore)

    config_file = root_dir / CONFIG_FILE
    write_new(config_file, options.config().to_toml())
    created.append(config_file)

    hello_world = src_dir / HELLO_WORLD_FILE
    write_new(hello_world, str(hello_world_page()))
    created.append(hello_world)

    for path in created:
        logger.debug("created `%s`", path)
    return created
