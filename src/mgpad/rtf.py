"""Minimal RTF support: bold, italic and underline runs of text.

Only what the editor's formatting toggles can produce is written. Reading
accepts RTF from other word processors but keeps just the text and those
three attributes; fonts, colours, sizes and paragraph layout are dropped.
"""
from __future__ import annotations

import codecs
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List

__all__ = ["TextRun", "read_rtf", "write_rtf", "merge_runs"]

logger = logging.getLogger(__name__)

RTF_HEADER = "{\\rtf1\\ansi\\deff0{\\fonttbl{\\f0 Segoe UI;}}\\fs22 "
DEFAULT_CODEPAGE = "cp1252"

# Groups whose text is metadata, not document content
_SKIPPED_DESTINATIONS = {
    "fonttbl", "colortbl", "stylesheet", "info", "pict", "header", "footer",
    "headerl", "headerr", "footerl", "footerr", "listtable", "listoverridetable",
    "rsidtbl", "generator", "xmlnstbl", "themedata", "latentstyles",
}

_TOKEN = re.compile(
    r"\\(?P<word>[a-zA-Z]+)(?P<arg>-?\d+)? ?"
    r"|\\'(?P<hex>[0-9a-fA-F]{2})"
    r"|\\(?P<symbol>[^a-zA-Z])"
    r"|(?P<open>\{)|(?P<close>\})"
    r"|(?P<newline>\r\n|\r|\n)"
    r"|(?P<text>[^\\{}\r\n]+)"
)


@dataclass
class TextRun:
    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False

    def same_format(self, other: "TextRun") -> bool:
        return (self.bold, self.italic, self.underline) == (other.bold, other.italic, other.underline)


def merge_runs(runs: Iterable[TextRun]) -> List[TextRun]:
    """Join neighbouring runs that share formatting and drop empty ones."""
    merged: List[TextRun] = []
    for run in runs:
        if not run.text:
            continue
        if merged and merged[-1].same_format(run):
            merged[-1].text += run.text
        else:
            merged.append(TextRun(run.text, run.bold, run.italic, run.underline))
    return merged


def _escape(text: str) -> str:
    out = []
    for ch in text:
        if ch == "\\":
            out.append("\\\\")
        elif ch == "{":
            out.append("\\{")
        elif ch == "}":
            out.append("\\}")
        elif ch == "\n":
            out.append("\\par\n")
        elif ch == "\t":
            out.append("\\tab ")
        elif ord(ch) > 127:
            code = ord(ch)
            if code > 0xFFFF:
                # \u takes UTF-16 code units
                code -= 0x10000
                units = (0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF))
            else:
                units = (code,)
            for unit in units:
                out.append(f"\\u{_signed16(unit)}?")
        else:
            out.append(ch)
    return "".join(out)


def _signed16(value: int) -> int:
    return value - 65536 if value > 32767 else value


def write_rtf(runs: Iterable[TextRun]) -> str:
    parts = [RTF_HEADER]
    bold = italic = underline = False
    for run in runs:
        if run.bold != bold:
            parts.append("\\b " if run.bold else "\\b0 ")
            bold = run.bold
        if run.italic != italic:
            parts.append("\\i " if run.italic else "\\i0 ")
            italic = run.italic
        if run.underline != underline:
            parts.append("\\ul " if run.underline else "\\ulnone ")
            underline = run.underline
        parts.append(_escape(run.text))
    parts.append("}")
    return "".join(parts)


class _State:
    def __init__(self, bold=False, italic=False, underline=False, skip=False, uc=1):
        self.bold = bold
        self.italic = italic
        self.underline = underline
        self.skip = skip
        self.uc = uc

    def copy(self) -> "_State":
        return _State(self.bold, self.italic, self.underline, self.skip, self.uc)


def read_rtf(data: str) -> List[TextRun]:
    """Parse ``data`` into formatted runs.

    Consecutive ``\\'hh`` bytes are decoded together with the document's
    ``\\ansicpg`` code page, so double-byte text such as cp949 or cp932 survives.

    Raises ValueError when ``data`` does not look like RTF at all.
    """
    if not data.lstrip().startswith("{\\rtf"):
        raise ValueError("not an RTF document")

    runs: List[TextRun] = []
    stack: List[_State] = []
    state = _State()
    # characters still to drop after a \uN escape
    pending_skip = 0
    group_start = False
    codepage = DEFAULT_CODEPAGE
    hex_bytes = bytearray()

    def emit(text: str) -> None:
        if state.skip or not text:
            return
        runs.append(TextRun(text, state.bold, state.italic, state.underline))

    def flush_hex() -> None:
        if hex_bytes:
            emit(bytes(hex_bytes).decode(codepage, errors="replace"))
            hex_bytes.clear()

    for match in _TOKEN.finditer(data):
        kind = match.lastgroup
        if kind == "arg":
            kind = "word"
        if kind == "newline":
            # raw line breaks in RTF source carry no meaning
            continue
        was_group_start, group_start = group_start, False

        if pending_skip and kind in ("text", "hex", "symbol"):
            if kind == "text":
                text = match.group("text")
                dropped = min(pending_skip, len(text))
                pending_skip -= dropped
                emit(text[dropped:])
            else:
                pending_skip -= 1
            continue
        pending_skip = 0

        if kind == "hex":
            hex_bytes.append(int(match.group("hex"), 16))
            continue
        flush_hex()

        if kind == "open":
            stack.append(state)
            state = state.copy()
            group_start = True
        elif kind == "close":
            if stack:
                state = stack.pop()
        elif kind == "text":
            emit(match.group("text"))
        elif kind == "symbol":
            symbol = match.group("symbol")
            if symbol == "*" and was_group_start:
                state.skip = True
            elif symbol in "\\{}":
                emit(symbol)
            elif symbol == "~":
                emit("\u00a0")
            elif symbol in "\r\n":
                emit("\n")
        else:
            word = match.group("word")
            arg = match.group("arg")
            enabled = arg is None or arg != "0"
            if word in _SKIPPED_DESTINATIONS:
                state.skip = True
            elif word == "b":
                state.bold = enabled
            elif word == "i":
                state.italic = enabled
            elif word == "ul":
                state.underline = enabled
            elif word in ("ulnone", "ul0"):
                state.underline = False
            elif word == "plain":
                state.bold = state.italic = state.underline = False
            elif word in ("par", "line"):
                emit("\n")
            elif word == "tab":
                emit("\t")
            elif word == "ansicpg" and arg is not None:
                codepage = _codepage(int(arg))
            elif word == "uc" and arg is not None:
                state.uc = int(arg)
            elif word == "u" and arg is not None:
                code = int(arg)
                if code < 0:
                    code += 65536
                emit(chr(code))
                pending_skip = state.uc

    flush_hex()
    return _join_surrogates(merge_runs(runs))


def _codepage(number: int) -> str:
    name = f"cp{number}"
    try:
        codecs.lookup(name)
    except LookupError:
        logger.warning("Unsupported RTF code page %d, decoding as %s", number, DEFAULT_CODEPAGE)
        return DEFAULT_CODEPAGE
    return name


def _join_surrogates(runs: List[TextRun]) -> List[TextRun]:
    for run in runs:
        if any("\ud800" <= ch <= "\udfff" for ch in run.text):
            run.text = run.text.encode("utf-16-be", "surrogatepass").decode("utf-16-be", "replace")
    return runs
