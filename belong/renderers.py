"""Markdown rendering for Belong.

Page contents are converted to HTML with mistune. Two things are added on
top of plain CommonMark rendering:

- Links and images pointing at ``.md`` files are rewritten to the ``.html``
  file the page will be rendered to, keeping any ``#fragment``.
- Fenced code blocks with a language are highlighted with Pygments.
"""

from __future__ import annotations

import re

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

MARKDOWN_URL_RE = re.compile(r"(?P<link>.*)\.md(?P<anchor>#.*)?", re.DOTALL)
SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")

PLUGINS = ["strikethrough", "footnotes", "table", "url", "task_lists"]


def fix_markdown_url(url: str) -> str:
    """Point a link at a Markdown file to the rendered HTML file instead.

    Args:
        url: Link target as written in the Markdown source.

    Returns:
        The rewritten URL, or ``url`` unchanged if it does not target a
        local ``.md`` file.

    Examples:
        >>> fix_markdown_url("path/to/file.md#heading")
        'path/to/file.html#heading'
        >>> fix_markdown_url("https://example.com/README.md")
        'https://example.com/README.md'
    """
    if SCHEME_RE.match(url) or url.startswith("//"):
        return url
    match = MARKDOWN_URL_RE.fullmatch(url)
    if match is None:
        return url
    return f"{match.group('link')}.html{match.group('anchor') or ''}"


class _HighlightRenderer(mistune.HTMLRenderer):
    """HTML renderer with Markdown link fixing and syntax highlighting."""

    def __init__(self):
        super().__init__(escape=False)

    def link(self, text: str, url: str, title: str | None = None) -> str:
        return super().link(text, fix_markdown_url(url), title)

    def image(self, text: str, url: str, title: str | None = None) -> str:
        return super().image(text, fix_markdown_url(url), title)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'rust').

        Returns:
            HTML string with highlighted code.
        """
        lang = info.split(None, 1)[0] if info and info.strip() else None
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{lang}"' if lang else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


class MarkdownRenderer:
    """Renders Markdown page contents to an HTML fragment."""

    def render(self, content: str) -> str:
        """Render Markdown content to HTML.

        Args:
            content: Markdown source content.

        Returns:
            Rendered HTML.
        """
        markdown = mistune.create_markdown(renderer=_HighlightRenderer(), plugins=PLUGINS)
        return markdown(content)


def pygments_css() -> str:
    """Return the CSS rules for highlighted code blocks."""
    return HtmlFormatter().get_style_defs(".highlight")
