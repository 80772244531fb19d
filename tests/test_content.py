from datetime import date
from pathlib import Path, PurePath

import pytest

from belong.content import ContentProcessor, FileContentLoader, Page, load_page
from belong.errors import BuildError, FrontMatterError
from belong.frontmatter import FrontMatter


def create_src(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    (src / "posts" / "2020").mkdir(parents=True)
    (src / "index.md").write_text('+++\ntitle = "Home"\n+++\nWelcome\n', encoding="utf-8")
    (src / "posts" / "2020" / "first.md").write_text(
        '+++\ntitle = "First"\ndate = "2020-03-21"\nkind = "post"\n+++\nHello\n',
        encoding="utf-8",
    )
    (src / "about.MD").write_text("No front matter here.\n", encoding="utf-8")
    (src / "notes.txt").write_text("not a page", encoding="utf-8")
    (src / "folder.md").mkdir()
    return src


def test_loader_finds_markdown_files_in_sorted_order(tmp_path):
    """Test Markdown discovery is recursive and sorted."""
    src = create_src(tmp_path)
    files = FileContentLoader(src).iter_files()
    assert [f.relative_to(src).as_posix() for f in files] == [
        "about.MD",
        "index.md",
        "posts/2020/first.md",
    ]


def test_loader_missing_directory(tmp_path, caplog):
    """Test a missing content directory yields no files."""
    assert FileContentLoader(tmp_path / "src").iter_files() == []
    assert "does not exist" in caplog.text


def test_content_processor_loads_pages(tmp_path):
    """Test loading pages with and without front matter."""
    src = create_src(tmp_path)
    pages = ContentProcessor(src).load()
    by_path = {page.path.as_posix(): page for page in pages}

    assert set(by_path) == {"about.MD", "index.md", "posts/2020/first.md"}
    assert by_path["index.md"].front_matter.title == "Home"
    assert by_path["index.md"].contents == "Welcome\n"
    assert by_path["about.MD"].front_matter == FrontMatter()
    assert by_path["about.MD"].contents == "No front matter here.\n"
    first = by_path["posts/2020/first.md"]
    assert first.front_matter.date == date(2020, 3, 21)
    assert first.url == "posts/2020/first.html"
    assert first.path_to_root == "../../"


def test_content_processor_with_custom_loader(tmp_path):
    src = create_src(tmp_path)

    class OnlyIndex(FileContentLoader):
        def iter_files(self):
            return [self.src_dir / "index.md"]

    pages = ContentProcessor(src, content_loader=OnlyIndex(src)).load()
    assert [page.path for page in pages] == [PurePath("index.md")]


def test_bad_front_matter_names_the_page(tmp_path):
    """Test a load failure names the page."""
    src = tmp_path / "src"
    src.mkdir()
    bad = src / "test.md"
    bad.write_text("\n+++\nbad toml\n+++\ntesting...\n", encoding="utf-8")

    with pytest.raises(BuildError) as excinfo:
        ContentProcessor(src).load()
    assert str(bad) in str(excinfo.value)
    assert excinfo.value.path == bad
    assert isinstance(excinfo.value.__cause__, FrontMatterError)


def test_load_page_is_relative_to_src(tmp_path):
    src = create_src(tmp_path)
    page = load_page(src, src / "posts" / "2020" / "first.md")
    assert page.path == PurePath("posts/2020/first.md")


def test_page_context():
    """Test the template context of a page."""
    page = Page(
        path=PurePath("notes/today.md"),
        front_matter=FrontMatter(title="Today", rest={"mood": "good"}),
        contents="ignored",
    )
    context = page.context("<p>hi</p>")
    assert context["url"] == "notes/today.html"
    assert context["path"] == "notes/today.html"
    assert context["content"] == "<p>hi</p>"
    assert context["meta"]["title"] == "Today"
    assert context["meta"]["mood"] == "good"
    assert context["meta"]["date"] is None
