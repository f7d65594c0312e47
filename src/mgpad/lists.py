"""Plain-text list handling: numbered, lettered and bulleted lines."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

INDENT_SPACES_PER_LEVEL = 4

_LIST_PREFIX = re.compile(
    r"^(?P<indent>[ \t]*)"
    r"(?:(?P<number>\d+)(?P<npunct>[.)])|(?P<letter>[A-Za-z])(?P<lpunct>[.)])|(?P<bullet>[*-]))"
    r"(?P<spacing>[ \t]+)"
)


class ListKind(Enum):
    NUMBERED = "numbered"
    LETTERED = "lettered"
    BULLET = "bullet"


@dataclass(frozen=True)
class ListLine:
    indent: str
    level: int
    kind: ListKind
    marker: str
    punctuation: str
    spacing: str
    content: str
    line_break: str

    @property
    def prefix(self) -> str:
        return self.indent + self.marker + self.punctuation + self.spacing

    @property
    def uppercase(self) -> bool:
        return self.kind is ListKind.LETTERED and self.marker.isupper()


def _split_line_break(line: str) -> Tuple[str, str]:
    body = line.rstrip("\r\n")
    return body, line[len(body):]


def level_for_indent(indent: str) -> int:
    spaces = sum(INDENT_SPACES_PER_LEVEL if ch == "\t" else 1 for ch in indent)
    return spaces // INDENT_SPACES_PER_LEVEL


def parse_list_line(line: str) -> Optional[ListLine]:
    body, line_break = _split_line_break(line)
    match = _LIST_PREFIX.match(body)
    if not match:
        return None
    if match.group("number") is not None:
        kind, marker, punct = ListKind.NUMBERED, match.group("number"), match.group("npunct")
    elif match.group("letter") is not None:
        kind, marker, punct = ListKind.LETTERED, match.group("letter"), match.group("lpunct")
    else:
        kind, marker, punct = ListKind.BULLET, match.group("bullet"), ""
    indent = match.group("indent")
    return ListLine(
        indent=indent,
        level=level_for_indent(indent),
        kind=kind,
        marker=marker,
        punctuation=punct,
        spacing=match.group("spacing"),
        content=body[match.end():],
        line_break=line_break,
    )


def is_list_line(line: str) -> bool:
    return parse_list_line(line) is not None


def indent_level(line: str) -> int:
    parsed = parse_list_line(line)
    return parsed.level if parsed else 0


def set_indent_level(line: str, level: int) -> str:
    """Re-indent a list line to ``level``; other lines come back unchanged."""
    parsed = parse_list_line(line)
    if parsed is None:
        return line
    body, line_break = _split_line_break(line)
    indent = " " * (max(0, level) * INDENT_SPACES_PER_LEVEL)
    return indent + body[len(parsed.indent):] + line_break


def letter_marker(index: int, uppercase: bool) -> str:
    """1-based ``index`` to a letter; past z (or Z) stays at the last letter."""
    base = ord("A") if uppercase else ord("a")
    offset = min(max(0, index - 1), 25)
    return chr(base + offset)


def _marker_for(kind: ListKind, index: int, uppercase: bool) -> str:
    if kind is ListKind.NUMBERED:
        return str(index)
    return letter_marker(index, uppercase)


def continue_list(line: str) -> Optional[str]:
    """Prefix to start the line after ``line`` with when Enter is pressed.

    Returns None when ``line`` is not a list item and an empty string when
    the item has no content, which ends the list.
    """
    parsed = parse_list_line(line)
    if parsed is None:
        return None
    if not parsed.content.strip():
        return ""
    if parsed.kind is ListKind.BULLET:
        return parsed.prefix
    if parsed.kind is ListKind.NUMBERED:
        marker = str(int(parsed.marker) + 1)
    else:
        position = ord(parsed.marker.lower()) - ord("a") + 1
        marker = letter_marker(position + 1, parsed.uppercase)
    return parsed.indent + marker + parsed.punctuation + parsed.spacing


def renumber_lines(lines: List[str]) -> List[str]:
    """Renumber ordered lists so each indent level counts from 1 (or a).

    Any line that is not a list item ends every list above it. Bullets keep
    their marker but interrupt ordered numbering at their own level.
    """
    out: List[str] = []
    # level -> (kind, next index, uppercase)
    counters: Dict[int, Tuple[ListKind, int, bool]] = {}
    for line in lines:
        parsed = parse_list_line(line)
        if parsed is None:
            counters.clear()
            out.append(line)
            continue
        for level in [lvl for lvl in counters if lvl > parsed.level]:
            del counters[level]
        if parsed.kind is ListKind.BULLET:
            counters.pop(parsed.level, None)
            out.append(line)
            continue
        current = counters.get(parsed.level)
        if current is None or current[0] is not parsed.kind:
            current = (parsed.kind, 1, parsed.uppercase)
        kind, index, uppercase = current
        marker = _marker_for(kind, index, uppercase)
        counters[parsed.level] = (kind, index + 1, uppercase)
        new_prefix = parsed.indent + marker + parsed.punctuation + parsed.spacing
        out.append(new_prefix + parsed.content + parsed.line_break)
    return out
