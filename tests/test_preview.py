from mgpad.preview import PLACEHOLDER, render_markdown, render_preview_html
from mgpad.themes import THEMES


def test_render_markdown_extras() -> None:
    html = render_markdown("# Title\n\n~~gone~~\n\n| a | b |\n|---|---|\n| 1 | 2 |\n")

    assert "<h1" in html and "Title</h1>" in html
    assert "<s>gone</s>" in html or "<del>gone</del>" in html
    assert "<table>" in html


def test_preview_page_is_themed() -> None:
    page = render_preview_html("**bold**", theme="dark", title="notes.md")

    assert page.startswith("<!DOCTYPE html>")
    assert "<strong>bold</strong>" in page
    assert THEMES["dark"].background in page
    assert "<title>notes.md</title>" in page


def test_empty_document_shows_placeholder() -> None:
    page = render_preview_html("   \n")
    assert PLACEHOLDER in page


def test_unknown_theme_falls_back() -> None:
    page = render_preview_html("text", theme="neon")
    assert THEMES["light"].background in page


def test_title_is_escaped() -> None:
    page = render_preview_html("x", title="<b>&")
    assert "<title>&lt;b&gt;&amp;</title>" in page
