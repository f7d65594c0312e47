"""HTML for the Markdown preview pane."""
import html

import markdown2

from mgpad.themes import get_theme

MARKDOWN_EXTRAS = [
    "fenced-code-blocks",
    "tables",
    "strike",
    "task_list",
    "header-ids",
    "footnotes",
]

PLACEHOLDER = '<p class="placeholder">Nothing to preview yet. Start typing on the left.</p>'


def render_markdown(text):
    return markdown2.markdown(text, extras=MARKDOWN_EXTRAS)


def render_preview_html(text, theme="light", title="Preview"):
    """Render ``text`` as a complete themed HTML page."""
    body = render_markdown(text) if text.strip() else PLACEHOLDER
    css = get_theme(theme).preview_css()
    return (
        '<!DOCTYPE html><html><head><meta charset="utf-8">'
        f'<title>{html.escape(title)}</title>'
        f'<style>{css}</style></head>'
        f'<body><main class="doc">{body}</main></body></html>'
    )
