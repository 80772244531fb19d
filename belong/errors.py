"""Error types for Belong.

Every failure raised by the build pipeline is a ``BelongError``. Context is
added at each call boundary with ``raise Outer(...) from inner`` so that the
final report reads as a causal chain, from the outermost operation down to
the root cause.

Key classes:
- BelongError: Base class carrying an optional source path.
- StructuredDataError: Malformed TOML in a config file or front matter block.
- FrontMatterError: Front matter present but not parseable into fields.
- FileError: A file or directory could not be read, written or created.
- DirectiveError: A directive in page content has malformed arguments.
- TemplateRenderError: The template engine failed to render a template.
- PathEncodingError: A page path cannot be represented as URL text.
- BuildError: Contextual wrapper used while loading and rendering.
"""

from __future__ import annotations

from pathlib import PurePath


class BelongError(Exception):
    """Base error with a human-readable message.

    Attributes:
        message: Human-readable error message.
        path: Path to the file the error concerns, if any.
    """

    def __init__(self, message: str, path: PurePath | None = None):
        self.message = message
        self.path = path
        super().__init__(message)


class StructuredDataError(BelongError):
    """Malformed TOML, reported with line and column when known."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        col: int | None = None,
        path: PurePath | None = None,
    ):
        self.line = line
        self.col = col
        super().__init__(message, path)


class FrontMatterError(BelongError):
    """Front matter block found but it could not be parsed."""


class FileError(BelongError):
    """A filesystem operation failed for a specific path."""


class DirectiveError(BelongError):
    """A directive could not be resolved."""


class TemplateRenderError(BelongError):
    """A theme template failed to render."""


class PathEncodingError(BelongError):
    """A page path is not valid UTF-8."""


class BuildError(BelongError):
    """Failure while loading, preprocessing or rendering a project."""


def error_chain(exc: BaseException) -> list[str]:
    """Return the messages of an exception and its causes, outermost first.

    Consecutive identical messages are collapsed, which happens when a
    library exception is re-raised as a ``StructuredDataError``.

    Args:
        exc: The exception to walk.

    Returns:
        List of messages.
    """
    messages: list[str] = []
    current: BaseException | None = exc
    while current is not None:
        message = str(current) or type(current).__name__
        if not messages or messages[-1] != message:
            messages.append(message)
        current = current.__cause__
    return messages


def format_error(exc: BaseException) -> str:
    """Format an exception chain for display.

    Args:
        exc: The exception to format.

    Returns:
        The outermost message followed by a numbered "Caused by" list.

    Examples:
        >>> format_error(BuildError("failed to load project"))
        'failed to load project'
    """
    head, *causes = error_chain(exc)
    if not causes:
        return head
    lines = [head, "", "Caused by:"]
    if len(causes) == 1:
        lines.append(f"    {causes[0]}")
    else:
        lines.extend(f"    {i}: {cause}" for i, cause in enumerate(causes))
    return "\n".join(lines)
