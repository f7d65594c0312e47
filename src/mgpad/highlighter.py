import re

from PyQt6.QtGui import QColor, QFont, QSyntaxHighlighter, QTextCharFormat

from mgpad.themes import get_theme


class MarkdownHighlighter(QSyntaxHighlighter):
    """Colours Markdown syntax while a .md document is open."""

    def __init__(self, document, theme="light"):
        super().__init__(document)
        self.enabled = False
        self.rules = []
        self.set_theme(theme)

    def set_theme(self, theme):
        palette = get_theme(theme)
        self.rules = []

        def add(pattern, color, bold=False, italic=False, underline=False, mono=False):
            fmt = QTextCharFormat()
            fmt.setForeground(QColor(color))
            if bold:
                fmt.setFontWeight(QFont.Weight.Bold)
            fmt.setFontItalic(italic)
            fmt.setFontUnderline(underline)
            if mono:
                fmt.setFontFamilies(["monospace"])
            self.rules.append((re.compile(pattern), fmt))

        add(r'^#{1,6}\s.*', palette.heading, bold=True)
        add(r'\*\*[^*]+\*\*|__[^_]+__', palette.emphasis, bold=True)
        add(r'(?<!\*)\*[^*\s][^*]*\*(?!\*)|(?<!_)_[^_\s][^_]*_(?!_)', palette.emphasis, italic=True)
        add(r'`[^`]+`', palette.code, mono=True)
        add(r'^>.*', palette.quote)
        add(r'^\s*(?:[-+*]|\d+[.)]|[A-Za-z][.)])\s', palette.list_marker)
        add(r'!?\[[^\]]*\]\([^)]+\)', palette.link, underline=True)
        self.rehighlight()

    def set_enabled(self, enabled):
        if enabled != self.enabled:
            self.enabled = enabled
            self.rehighlight()

    def highlightBlock(self, text):
        if not self.enabled:
            return
        for pattern, fmt in self.rules:
            for match in pattern.finditer(text):
                self.setFormat(match.start(), match.end() - match.start(), fmt)
