"""Belong static site generator.

This package turns a directory of Markdown pages with TOML front matter into
a static site, using Jinja2 templates from a themeable set of defaults.

A project looks like this::

    belong.toml     configuration
    src/            Markdown pages, rendered to public/<path>.html
    theme/          optional template and stylesheet overrides
    public/         build output, recreated on every build

The main entry point is the CLI module, which provides commands for
initializing new projects and building them.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
