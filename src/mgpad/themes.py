"""Light and dark palettes shared by the window, the preview and the highlighter."""
from dataclasses import dataclass

DEFAULT_THEME = "light"


@dataclass(frozen=True)
class Theme:
    name: str
    background: str
    surface: str
    text: str
    text_muted: str
    accent: str
    border: str
    code_bg: str
    # Markdown highlighter colours
    heading: str
    emphasis: str
    code: str
    quote: str
    list_marker: str
    link: str

    def stylesheet(self) -> str:
        return f'''
            QMainWindow, QDialog {{
                background: {self.background};
                color: {self.text};
            }}
            QTextEdit, QListWidget {{
                background: {self.surface};
                color: {self.text};
                border: 1px solid {self.border};
                selection-background-color: {self.accent};
            }}
            QToolBar {{
                background: {self.background};
                border-bottom: 1px solid {self.border};
                spacing: 4px;
            }}
            QToolButton {{
                color: {self.text};
                padding: 4px 8px;
            }}
            QToolButton:checked {{
                background: {self.code_bg};
                border-radius: 4px;
            }}
            QStatusBar {{
                background: {self.background};
                color: {self.text_muted};
                border-top: 1px solid {self.border};
                font-size: 12px;
            }}
            QStatusBar::item {{
                border: none;
            }}
            QPushButton {{
                color: {self.text};
                border: 1px solid {self.border};
                border-radius: 6px;
                padding: 6px 16px;
            }}
        '''

    def preview_css(self) -> str:
        return f'''
            :root {{
                --bg: {self.background};
                --surface: {self.surface};
                --text: {self.text};
                --text-muted: {self.text_muted};
                --accent: {self.accent};
                --border: {self.border};
                --code-bg: {self.code_bg};
            }}
            * {{ box-sizing: border-box; }}
            body {{
                background: var(--bg);
                color: var(--text);
                font-family: -apple-system, "Segoe UI", Roboto, sans-serif;
                line-height: 1.7;
                margin: 0;
                padding: 32px 28px;
            }}
            .doc {{ max-width: 820px; margin: 0 auto; }}
            h1, h2, h3, h4, h5, h6 {{ line-height: 1.3; margin: 1.4em 0 0.6em; }}
            h1 {{ border-bottom: 1px solid var(--border); padding-bottom: 0.3em; }}
            a {{ color: var(--accent); text-decoration: none; }}
            a:hover {{ text-decoration: underline; }}
            code {{
                background: var(--code-bg);
                border-radius: 4px;
                font-family: "JetBrains Mono", Consolas, monospace;
                font-size: 0.9em;
                padding: 0.15em 0.4em;
            }}
            pre {{
                background: var(--code-bg);
                border: 1px solid var(--border);
                border-radius: 8px;
                overflow-x: auto;
                padding: 14px 16px;
            }}
            pre code {{ background: none; padding: 0; }}
            blockquote {{
                border-left: 3px solid var(--accent);
                color: var(--text-muted);
                margin: 1em 0;
                padding: 0.2em 1em;
            }}
            table {{ border-collapse: collapse; margin: 1em 0; }}
            th, td {{ border: 1px solid var(--border); padding: 6px 12px; }}
            hr {{ border: none; border-top: 1px solid var(--border); margin: 2em 0; }}
            .placeholder {{ color: var(--text-muted); font-style: italic; }}
        '''


THEMES = {
    "light": Theme(
        name="light",
        background="#f6f7f9",
        surface="#ffffff",
        text="#1f2430",
        text_muted="#6b7280",
        accent="#3b6fd8",
        border="#d9dde4",
        code_bg="#eef1f5",
        heading="#2f5bb7",
        emphasis="#7a3fb0",
        code="#0f7b8a",
        quote="#5b6477",
        list_marker="#16806b",
        link="#2f5bb7",
    ),
    "dark": Theme(
        name="dark",
        background="#0d0f14",
        surface="#12151c",
        text="#e4e8f1",
        text_muted="#6b7280",
        accent="#7aa2f7",
        border="#262b36",
        code_bg="#1a1e28",
        heading="#7aa2f7",
        emphasis="#bb9af7",
        code="#7dcfff",
        quote="#9aa5ce",
        list_marker="#73daca",
        link="#7aa2f7",
    ),
}


def get_theme(name):
    return THEMES.get(name, THEMES[DEFAULT_THEME])


def next_theme(name):
    """Theme the View > Toggle Theme action switches to."""
    names = list(THEMES)
    current = names.index(name) if name in names else 0
    return names[(current + 1) % len(names)]
