"""Document kinds and the per-window file state."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

APP_NAME = "MGPad"
UNTITLED = "Untitled"


class DocumentType(Enum):
    RICH_TEXT = "rich_text"
    PLAIN_TEXT = "plain_text"
    MARKDOWN = "markdown"


_EXTENSIONS = {
    DocumentType.RICH_TEXT: ".rtf",
    DocumentType.MARKDOWN: ".md",
    DocumentType.PLAIN_TEXT: ".txt",
}

_TYPES_BY_EXTENSION = {
    ".rtf": DocumentType.RICH_TEXT,
    ".md": DocumentType.MARKDOWN,
    ".markdown": DocumentType.MARKDOWN,
}

FILE_FILTERS = [
    "Text Documents (*.txt)",
    "Rich Text Format (*.rtf)",
    "Markdown Files (*.md)",
    "All Files (*)",
]

_FILTERS_BY_TYPE = {
    DocumentType.PLAIN_TEXT: FILE_FILTERS[0],
    DocumentType.RICH_TEXT: FILE_FILTERS[1],
    DocumentType.MARKDOWN: FILE_FILTERS[2],
}


def document_type_for_path(path) -> DocumentType:
    """Pick the document type from the file extension; unknown means plain text."""
    return _TYPES_BY_EXTENSION.get(Path(path).suffix.lower(), DocumentType.PLAIN_TEXT)


def extension_for(document_type: DocumentType) -> str:
    return _EXTENSIONS[document_type]


def filter_for(document_type: DocumentType) -> str:
    return _FILTERS_BY_TYPE[document_type]


def coerce_extension(file_path: str, selected_filter: str) -> str:
    """Give an extension-less save path the extension of the chosen filter."""
    p = Path(file_path)
    if p.suffix:
        return file_path
    for document_type, name in _FILTERS_BY_TYPE.items():
        if name == selected_filter:
            return str(p.with_suffix(extension_for(document_type)))
    return str(p.with_suffix(".txt"))


def read_text_file(path) -> str:
    """Read a document as UTF-8, dropping a leading byte order mark."""
    with open(path, 'r', encoding='utf-8-sig') as f:
        return f.read()


@dataclass
class DocumentState:
    path: Optional[str] = None
    document_type: DocumentType = DocumentType.RICH_TEXT
    dirty: bool = False

    @property
    def display_name(self) -> str:
        if not self.path:
            return UNTITLED
        return Path(self.path).name

    @property
    def window_title(self) -> str:
        marker = "* " if self.dirty else ""
        return f"{APP_NAME} - {marker}{self.display_name}"

    def set_file(self, path: Optional[str], document_type: DocumentType) -> None:
        self.path = path
        self.document_type = document_type

    def mark_dirty(self) -> bool:
        """Flag unsaved changes; returns False if the flag was already set."""
        if self.dirty:
            return False
        self.dirty = True
        return True

    def mark_clean(self) -> bool:
        if not self.dirty:
            return False
        self.dirty = False
        return True
