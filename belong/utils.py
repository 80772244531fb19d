"""Utility functions for Belong.

This module contains small helpers shared across the Belong codebase:
TOML loading with positioned errors, and filesystem helpers that report
failures as ``FileError`` tagged with the path involved.

Key functions:
    load_toml: Parse TOML text into plain Python values.
    toml_type_name: Name a value's TOML type for error messages.
    is_markdown: Check if a path is a Markdown file.
    read_text: Read a UTF-8 file.
    recreate_dir: Delete a directory if present, then create it empty.
    write_file: Write a file, creating parent directories.
    write_new: Create a file that must not exist yet.
"""

from __future__ import annotations

import datetime as dt
import shutil
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError, TOMLKitError

from .errors import FileError, StructuredDataError


def load_toml(text: str) -> dict[str, Any]:
    """Parse TOML text.

    Args:
        text: TOML source.

    Returns:
        The document as plain dicts, lists and scalars.

    Raises:
        StructuredDataError: If the text is not valid TOML. Line and column
            are relative to the start of ``text``.
    """
    try:
        document = tomlkit.parse(text)
    except ParseError as exc:
        raise StructuredDataError(str(exc), line=exc.line, col=exc.col) from exc
    except TOMLKitError as exc:
        raise StructuredDataError(str(exc)) from exc
    return document.unwrap()


def toml_type_name(value: Any) -> str:
    """Return the TOML name of a value's type.

    Examples:
        >>> toml_type_name(5)
        'integer'
        >>> toml_type_name(["a"])
        'array'
    """
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dt.datetime):
        return "datetime"
    if isinstance(value, dt.date):
        return "date"
    if isinstance(value, dt.time):
        return "time"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "table"
    return type(value).__name__


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md extension (case-insensitive).
    """
    return path.suffix.lower() == ".md"


def read_text(path: Path) -> str:
    """Read a UTF-8 text file.

    Raises:
        FileError: If the file cannot be read or decoded.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileError("failed to read file", path) from exc


def recreate_dir(path: Path) -> None:
    """Completely delete and recreate a directory.

    Args:
        path: Directory path to clean or create.

    Raises:
        FileError: If the directory cannot be removed or created.
    """
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise FileError("failed to remove directory", path) from exc
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileError("failed to create directory", path) from exc


def write_file(path: Path, contents: str) -> None:
    """Write a file, creating intermediate directories as needed.

    Raises:
        FileError: If a directory cannot be created or the file written.
    """
    directory = path.parent
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileError(f"failed to create directory `{directory}`", directory) from exc
    try:
        path.write_text(contents, encoding="utf-8")
    except OSError as exc:
        raise FileError(f"failed to write file `{path}`", path) from exc


def write_new(path: Path, contents: str) -> None:
    """Create and write a file that does not exist yet.

    Raises:
        FileError: If the file already exists or cannot be written.
    """
    try:
        with open(path, "x", encoding="utf-8") as f:
            f.write(contents)
    except OSError as exc:
        raise FileError(f"failed to create file `{path}`", path) from exc
