"""Protocol definitions for Belong.

The render step depends on two external capabilities: converting Markdown
to HTML and rendering named templates. Both are described here so that the
build can be driven by alternative implementations, and so tests can plug
in simple fakes.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MarkdownConverter(Protocol):
    """Converts Markdown page contents to an HTML fragment.

    Implementations are expected to rewrite links to ``.md`` files so they
    point at the rendered ``.html`` files.
    """

    @abstractmethod
    def render(self, content: str) -> str:
        """Render Markdown to HTML.

        Args:
            content: Markdown source.

        Returns:
            HTML fragment.
        """
        ...


@runtime_checkable
class TemplateRenderer(Protocol):
    """Renders templates by name."""

    @abstractmethod
    def render(self, name: str, context: dict[str, Any]) -> str:
        """Render a template.

        Args:
            name: Template name, e.g. ``page.html``.
            context: Variables to make available in the template.

        Returns:
            Rendered string.
        """
        ...
