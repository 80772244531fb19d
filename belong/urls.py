"""URL derivation for Belong pages.

A page's URL mirrors its path below the content directory with the Markdown
extension swapped for ``.html``. Since every page is written next to its
siblings in the output directory, templates reach the site root through a
relative prefix of ``../`` segments, one per parent directory.
"""

from __future__ import annotations

from pathlib import PurePath

from .errors import PathEncodingError

HTML_SUFFIX = ".html"


def _check_encoding(path: PurePath, segments: tuple[str, ...]) -> None:
    for segment in segments:
        try:
            segment.encode("utf-8")
        except UnicodeEncodeError:
            raise PathEncodingError(
                "page path (and subsequently the URL) is not valid UTF-8", path
            ) from None


def url_path(path: PurePath) -> str:
    """Return the URL of a page relative to the site root.

    Args:
        path: Page path relative to the content directory.

    Returns:
        ``/``-joined URL path ending in ``.html``.

    Raises:
        PathEncodingError: If a path segment is not valid UTF-8.

    Examples:
        >>> url_path(PurePath("path/segment/index.md"))
        'path/segment/index.html'
    """
    parts = path.with_suffix(HTML_SUFFIX).parts
    _check_encoding(path, parts)
    return "/".join(parts)


def path_to_root(path: PurePath) -> str:
    """Return the relative prefix from a page back to the site root.

    Only plain name segments are expected: page paths are always built
    relative to the content directory, so anything else is a bug.

    Args:
        path: Page path relative to the content directory.

    Returns:
        One ``../`` per parent directory, or ``""`` at the root.

    Raises:
        PathEncodingError: If a path segment is not valid UTF-8.
        AssertionError: If the path is absolute or contains ``.``/``..``.

    Examples:
        >>> path_to_root(PurePath("index.md"))
        ''
        >>> path_to_root(PurePath("path/segment/index.md"))
        '../../'
    """
    parent = path.parent
    for part in parent.parts:
        if part in (".", "..") or part == parent.anchor:
            raise AssertionError(f"unexpected path component `{part}`")
    _check_encoding(path, parent.parts)
    return "../" * len(parent.parts)
