"""Template rendering engine for Belong.

This module uses Jinja2 to render a theme's templates. Templates are looked
up by file name (``base.html``, ``index.html``, ``page.html``) so themes can
``{% extends "base.html" %}`` as usual.

Key class:
- TemplateEngine: Renders theme templates against a context mapping.

Templates see these names:
- ``config``: The project configuration (``config.project.title`` ...).
- ``path_to_root``: Relative prefix from the current page to the site root.
- ``this``: The page being rendered (``meta``, ``path``/``url``, ``content``).
- ``pages``: Every page context, in the index template only.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from jinja2 import DictLoader, Environment, select_autoescape
from markupsafe import Markup

from .renderers import pygments_css
from .theme import Theme

_MISSING = object()


def _lookup(item: Any, attribute: str) -> Any:
    """Resolve a dotted attribute on nested mappings, or return _MISSING."""
    value = item
    for key in attribute.split("."):
        if isinstance(value, Mapping) and key in value:
            value = value[key]
        else:
            return _MISSING
    return value


def filter_items(
    items: Iterable[Any], attribute: str | None = None, value: Any = None
) -> list[Any]:
    """Filter template values on a dotted attribute.

    With a ``value``, keep the items whose attribute equals it. Without one,
    keep the items where the attribute is present and not None. This lets a
    template drop undated pages before sorting on the date::

        {% for page in pages | filter(attribute="meta.date") | sort(attribute="meta.date") %}

    Args:
        items: Values to filter, usually page contexts.
        attribute: Dotted path to look up in each item.
        value: Value to compare against.

    Returns:
        The matching items, in their original order.
    """
    if attribute is None:
        raise TypeError("the `filter` filter requires an `attribute` argument")
    matches: list[Any] = []
    for item in items:
        found = _lookup(item, attribute)
        if found is _MISSING:
            found = None
        if (value is None and found is not None) or (
            value is not None and found == value
        ):
            matches.append(item)
    return matches


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        theme: The theme providing the templates.
        env: Jinja2 environment.
    """

    def __init__(self, theme: Theme):
        """Initialize the template engine.

        Args:
            theme: Theme whose templates are registered with the engine.
        """
        self.theme = theme
        self.env = Environment(
            loader=DictLoader(dict(theme.templates)),
            autoescape=select_autoescape(["html", "xml"]),
            enable_async=False,
        )
        self._install_globals()

    def _install_globals(self) -> None:
        """Install global functions and filters in the Jinja environment."""
        self.env.globals["pygments_css"] = self._pygments_css
        self.env.filters["filter"] = filter_items

    @staticmethod
    def _pygments_css() -> Markup:
        """Return Pygments CSS styles for syntax highlighting."""
        return Markup(pygments_css())

    def render(self, name: str, context: dict[str, Any]) -> str:
        """Render a theme template.

        Args:
            name: Template name, e.g. ``page.html``.
            context: Variables to make available in the template.

        Returns:
            Rendered string.

        Raises:
            jinja2.TemplateError: If the template is missing or fails.
        """
        template = self.env.get_template(name)
        return template.render(**context)
