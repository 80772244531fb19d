import pytest
from jinja2 import TemplateNotFound
from markupsafe import Markup

from belong.protocols import TemplateRenderer
from belong.templates import TemplateEngine, filter_items
from belong.theme import Theme

PAGES = [
    {"url": "a.html", "meta": {"kind": "post", "date": "2020-01-01"}},
    {"url": "b.html", "meta": {"kind": "page", "date": None}},
    {"url": "c.html", "meta": {"kind": "post", "date": None}},
    {"url": "d.html", "meta": {}},
]


def engine_for(template: str) -> TemplateEngine:
    return TemplateEngine(Theme(templates=(("page.html", template),), stylesheets=()))


def test_filter_by_value():
    """Test filtering on a dotted attribute equal to a value."""
    assert [p["url"] for p in filter_items(PAGES, attribute="meta.kind", value="post")] == [
        "a.html",
        "c.html",
    ]


def test_filter_by_presence():
    """Test filtering without a value keeps items where the attribute is set."""
    assert [p["url"] for p in filter_items(PAGES, attribute="meta.date")] == ["a.html"]


def test_filter_requires_attribute():
    with pytest.raises(TypeError):
        filter_items(PAGES)


def test_engine_renders_theme_templates():
    """Test templates can extend each other by name."""
    theme = Theme(
        templates=(("base.html", "<b>{% block body %}{% endblock %}</b>"),
                   ("page.html", '{% extends "base.html" %}{% block body %}{{ this.content }}{% endblock %}')),
        stylesheets=(),
    )
    engine = TemplateEngine(theme)
    assert isinstance(engine, TemplateRenderer)
    html = engine.render("page.html", {"this": {"content": Markup("<i>x</i>")}})
    assert html == "<b><i>x</i></b>"


def test_engine_escapes_plain_strings():
    """Test plain strings are autoescaped in HTML templates."""
    assert engine_for("{{ value }}").render("page.html", {"value": "<script>"}) == "&lt;script&gt;"


def test_engine_missing_template():
    engine = TemplateEngine(Theme(templates=(), stylesheets=()))
    with pytest.raises(TemplateNotFound):
        engine.render("page.html", {})


def test_filter_and_sort_in_template():
    """Test the filter filter chains with sort to list dated posts."""
    engine = engine_for(
        '{% for p in pages | filter(attribute="meta.kind", value="post") '
        '| filter(attribute="meta.date") | sort(attribute="meta.date", reverse=true) %}'
        "{{ p.url }};{% endfor %}"
    )
    pages = PAGES + [{"url": "e.html", "meta": {"kind": "post", "date": "2021-06-01"}}]
    assert engine.render("page.html", {"pages": pages}) == "e.html;a.html;"


def test_pygments_css_global():
    """Test the pygments_css global is rendered unescaped."""
    css = engine_for("{{ pygments_css() }}").render("page.html", {})
    assert ".highlight" in css
    assert "&gt;" not in css
