"""Command-line interface for Belong.

This module defines the CLI commands using Click framework.

Commands:
- init: Initialize a new project in the current directory.
- build: Build the project in the current directory into ``public/``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import NoReturn

import click
import questionary

from . import __version__
from .errors import BelongError, format_error

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("belong").setLevel(level)


@click.group()
@click.version_option(version=__version__, prog_name="belong")
@click.option(
    "-v", "--verbose", count=True, help="Increase log output (-v info, -vv debug)"
)
def cli(verbose: int):
    """Belong static site generator."""
    _configure_logging(verbose)


@cli.command()
def init():
    """Initialize a new project in the current directory."""
    from .scaffold import InitOptions, init_project

    root = Path.cwd()
    click.echo(
        "Initializing a new project ...\n\n"
        "Please answer the following questions to get started:\n"
    )

    title = questionary.text(
        "What title would you like to give the project?",
        style=_questionary_style(),
    ).ask()
    if title is None:
        raise click.Abort()

    author = questionary.text(
        "Who is the author of this project?",
        default=_git_config_user_name() or "",
        style=_questionary_style(),
    ).ask()
    if author is None:
        raise click.Abort()

    gitignore = questionary.confirm(
        "Would you like a .gitignore file to be created?",
        default=True,
        style=_questionary_style(),
    ).ask()
    if gitignore is None:
        raise click.Abort()

    options = InitOptions(
        root_dir=root,
        title=title.strip() or None,
        authors=[author.strip()] if author.strip() else [],
        gitignore=gitignore,
    )
    try:
        init_project(options)
    except BelongError as exc:
        _fail("Failed to initialize project:", exc)
    click.echo("\nAll done! Run `belong build --open` to build and open the project.")


@cli.command()
@click.option(
    "--open",
    "open_browser",
    is_flag=True,
    help="Open the built site in the default web browser",
)
def build(open_browser: bool):
    """Build the project from Markdown files."""
    project_root = Path.cwd()
    from .build import INDEX_FILE, build_site

    try:
        result = build_site(project_root)
    except BelongError as exc:
        _fail("Build failed:", exc)
    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")
    if open_browser:
        click.launch(str(result.output_dir / INDEX_FILE))


def _fail(heading: str, exc: BelongError) -> NoReturn:
    """Print an error chain to stderr and exit."""
    click.echo(click.style(heading, fg="red", bold=True), err=True)
    for line in format_error(exc).splitlines():
        click.echo(click.style(f"  {line}" if line else "", fg="yellow"), err=True)
    raise SystemExit(2)


def _git_config_user_name() -> str | None:
    """Return the user name configured in git, if any."""
    git_bin = shutil.which("git")
    if not git_bin:
        return None
    try:
        completed = subprocess.run(
            [git_bin, "config", "--get", "user.name"],
            capture_output=True,
            text=True,
        )
    except OSError:
        return None
    if completed.returncode != 0:
        return None
    return completed.stdout.strip() or None


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()
