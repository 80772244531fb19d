from pathlib import Path

import pytest

from belong.errors import BuildError, FileError, StructuredDataError, error_chain, format_error


def raise_chain():
    try:
        try:
            raise StructuredDataError("bad value at line 3 col 1", line=3, col=1)
        except StructuredDataError as exc:
            raise FileError("failed to read file", Path("a.toml")) from exc
    except FileError as exc:
        raise BuildError("failed to load project") from exc


def test_error_chain():
    """Test walking an exception's causes."""
    with pytest.raises(BuildError) as excinfo:
        raise_chain()
    assert error_chain(excinfo.value) == [
        "failed to load project",
        "failed to read file",
        "bad value at line 3 col 1",
    ]


def test_format_error_single():
    assert format_error(BuildError("failed to load project")) == "failed to load project"


def test_format_error_one_cause():
    try:
        raise BuildError("outer") from ValueError("inner")
    except BuildError as exc:
        assert format_error(exc) == "outer\n\nCaused by:\n    inner"


def test_format_error_numbered_causes():
    """Test several causes are numbered."""
    with pytest.raises(BuildError) as excinfo:
        raise_chain()
    assert format_error(excinfo.value) == (
        "failed to load project\n"
        "\n"
        "Caused by:\n"
        "    0: failed to read file\n"
        "    1: bad value at line 3 col 1"
    )


def test_repeated_messages_are_collapsed():
    """Test consecutive duplicate messages are collapsed."""
    try:
        raise StructuredDataError("same") from ValueError("same")
    except StructuredDataError as exc:
        assert error_chain(exc) == ["same"]


def test_error_attributes():
    exc = StructuredDataError("oops", line=2, col=5, path=Path("x.md"))
    assert exc.message == "oops"
    assert (exc.line, exc.col, exc.path) == (2, 5, Path("x.md"))
