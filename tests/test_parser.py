"""HTML section parser tests."""

import pytest

from linkchat.scrape.parser import parse_html

URL = "https://example.com/a"


def test_basic_document():
    html = "<html><body><h1> Example </h1><p>Hello world</p></body></html>"
    result = parse_html(URL, html)
    assert result.url == URL
    assert result.title == "Example"
    assert [(s.type, s.content) for s in result.sections] == [
        ("heading", "Example"),
        ("paragraph", "Hello world"),
    ]
    assert result.cached_at is None


def test_pass_order_headings_then_paragraphs_then_lists():
    html = """
    <p>intro</p>
    <ul><li>one</li></ul>
    <h2>Second</h2>
    <p>body</p>
    <h1>First</h1>
    <ol><li>a</li></ol>
    <h3>Third</h3>
    """
    result = parse_html(URL, html)
    assert [(s.type, s.content) for s in result.sections] == [
        ("heading", "Second"),
        ("heading", "First"),
        ("heading", "Third"),
        ("paragraph", "intro"),
        ("paragraph", "body"),
        ("list", "one"),
        ("list", "a"),
    ]


def test_whole_list_is_one_section():
    html = "<ul>\n<li>alpha</li>\n<li>beta</li>\n<li>gamma</li>\n</ul>"
    result = parse_html(URL, html)
    assert len(result.sections) == 1
    section = result.sections[0]
    assert section.type == "list"
    assert "alpha" in section.content and "gamma" in section.content
    assert section.content == section.content.strip()


def test_title_is_first_h1():
    html = "<h2>Sub</h2><h1>Main</h1><h1>Other</h1>"
    assert parse_html(URL, html).title == "Main"


def test_no_h1_gives_empty_title():
    result = parse_html(URL, "<h2>Only h2</h2><p>text</p>")
    assert result.title == ""
    assert len(result.sections) == 2


def test_empty_element_yields_empty_content():
    result = parse_html(URL, "<p>   </p>")
    assert len(result.sections) == 1
    assert result.sections[0].content == ""


def test_h4_and_other_tags_ignored():
    result = parse_html(URL, "<h4>x</h4><div>y</div><span>z</span>")
    assert result.sections == []
    assert result.title == ""


def test_nested_text_flattened():
    result = parse_html(URL, "<p>Hello <b>bold</b> <a href='#'>link</a></p>")
    assert result.sections[0].content == "Hello bold link"


@pytest.mark.parametrize(
    "html",
    [
        "",
        None,
        "<<<>>>",
        "<html><body><p>unclosed <div><h1>oops",
        "not html at all",
        "<script>var x = '<p>not a paragraph</p>';</script>",
    ],
)
def test_never_raises(html):
    result = parse_html(URL, html)
    assert result.url == URL
    if not result.sections:
        assert result.title == ""


def test_section_count_matches_elements():
    html = "<h1>a</h1><h2>b</h2><h3>c</h3>" + "<p>p</p>" * 4 + "<ul></ul><ol></ol>"
    assert len(parse_html(URL, html).sections) == 3 + 4 + 2
