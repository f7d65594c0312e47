"""Finding and discarding autosave copies left behind by an earlier session."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from mgpad.autosave import METADATA_SUFFIX, autosave_directory, delete_quietly
from mgpad.documents import UNTITLED, DocumentType, document_type_for_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecoveryItem:
    display_name: str
    original_path: Optional[str]
    timestamp_utc: datetime
    autosave_path: Path
    metadata_path: Path
    document_type: DocumentType
    is_untitled: bool

    @property
    def timestamp_local(self) -> str:
        return self.timestamp_utc.astimezone().strftime("%Y-%m-%d %H:%M")


def _parse_timestamp(value) -> datetime:
    stamp = datetime.fromisoformat(value)
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


class RecoveryService:
    def __init__(self, directory: Optional[Path] = None) -> None:
        self.directory = Path(directory) if directory is not None else autosave_directory()

    def recoverable_items(self) -> List[RecoveryItem]:
        """Autosaves that still have both files, newest first."""
        if not self.directory.is_dir():
            return []

        items = []
        for metadata_path in sorted(self.directory.glob("*" + METADATA_SUFFIX)):
            autosave_path = self._content_path(metadata_path)
            if autosave_path is None:
                continue
            try:
                metadata = json.loads(metadata_path.read_text(encoding="utf-8"))
                original_path = metadata.get("OriginalPath") or None
                item = RecoveryItem(
                    display_name=Path(original_path).name if original_path else UNTITLED,
                    original_path=original_path,
                    timestamp_utc=_parse_timestamp(metadata["TimestampUtc"]),
                    autosave_path=autosave_path,
                    metadata_path=metadata_path,
                    document_type=document_type_for_path(autosave_path),
                    is_untitled=bool(metadata.get("IsUntitled", original_path is None)),
                )
            except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
                logger.warning("Failed to parse autosave metadata '%s': %s", metadata_path, exc)
                continue
            items.append(item)

        items.sort(key=lambda item: item.timestamp_utc, reverse=True)
        return items

    def _content_path(self, metadata_path: Path) -> Optional[Path]:
        stem = metadata_path.stem
        for candidate in sorted(self.directory.iterdir()):
            if candidate.suffix.lower() != METADATA_SUFFIX and candidate.stem == stem and candidate.is_file():
                return candidate
        return None

    def discard(self, item: RecoveryItem) -> None:
        delete_quietly(item.autosave_path)
        delete_quietly(item.metadata_path)

    def discard_all(self, items: Iterable[RecoveryItem]) -> None:
        for item in list(items):
            self.discard(item)
