"""Periodic background copies of unsaved documents."""
from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from platformdirs import user_data_dir
from PyQt6.QtCore import QTimer

from mgpad.documents import APP_NAME, DocumentType

logger = logging.getLogger(__name__)

METADATA_SUFFIX = ".json"


def autosave_directory() -> Path:
    return Path(user_data_dir(APP_NAME, appauthor=False)) / "Autosave"


def autosave_base_name(original_path: Optional[str], session_id: str) -> str:
    """File name stem for a document's autosave copy.

    Saved documents are keyed by their path so two files named alike do not
    overwrite each other's copy; untitled ones by the editor session.
    """
    if not original_path:
        return f"Untitled-{session_id}"
    digest = hashlib.sha1(str(Path(original_path).resolve()).encode("utf-8")).hexdigest()[:8]
    return f"{Path(original_path).stem}-{digest}"


def delete_quietly(path) -> None:
    """Remove ``path`` if present; failures are logged, never raised."""
    if not path:
        return
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Failed to delete autosave file '%s': %s", path, exc)


@dataclass(frozen=True)
class AutosaveContext:
    base_name: str
    document_type: DocumentType
    extension: str
    original_path: Optional[str]
    is_untitled: bool


class AutosaveService:
    """Writes the current document to the autosave folder while it is dirty.

    ``write_callback(path, document_type)`` does the actual writing and returns
    True on success; the service only adds the metadata file beside it.
    """

    def __init__(
        self,
        interval_ms: int,
        is_dirty: Callable[[], bool],
        context_provider: Callable[[], AutosaveContext],
        write_callback: Callable[[str, DocumentType], bool],
        directory: Optional[Path] = None,
    ) -> None:
        self.interval_ms = interval_ms
        self._is_dirty = is_dirty
        self._context_provider = context_provider
        self._write_callback = write_callback
        self.directory = Path(directory) if directory is not None else autosave_directory()
        self.last_autosave_path: Optional[Path] = None
        self.last_metadata_path: Optional[Path] = None
        self._is_autosaving = False
        self._timer: Optional[QTimer] = None

    def start(self) -> None:
        if self._timer is None:
            self._timer = QTimer()
            self._timer.timeout.connect(self.tick)
        self._timer.setInterval(self.interval_ms)
        self._timer.start()

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.stop()

    def on_manual_save(self) -> None:
        self.delete_current_files()

    def delete_current_files(self) -> None:
        delete_quietly(self.last_autosave_path)
        delete_quietly(self.last_metadata_path)
        self.last_autosave_path = None
        self.last_metadata_path = None

    def tick(self) -> bool:
        """Autosave once if needed; returns True when a copy was written."""
        if self._is_autosaving or not self._is_dirty():
            return False
        context = self._context_provider()
        if not context.base_name or not context.base_name.strip():
            return False

        self._is_autosaving = True
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            autosave_path = self.directory / (context.base_name + context.extension)
            metadata_path = self.directory / (context.base_name + METADATA_SUFFIX)
            if not self._write_callback(str(autosave_path), context.document_type):
                return False
            metadata = {
                "OriginalPath": context.original_path,
                "IsUntitled": context.is_untitled,
                "TimestampUtc": datetime.now(timezone.utc).isoformat(),
            }
            metadata_path.write_text(json.dumps(metadata, indent=2), encoding="utf-8")
            # the document was renamed or recovered: drop the copy under the old name
            if self.last_autosave_path is not None and Path(self.last_autosave_path) != autosave_path:
                delete_quietly(self.last_autosave_path)
            if self.last_metadata_path is not None and Path(self.last_metadata_path) != metadata_path:
                delete_quietly(self.last_metadata_path)
            self.last_autosave_path = autosave_path
            self.last_metadata_path = metadata_path
            logger.debug("Autosaved %s", autosave_path)
            return True
        except (OSError, ValueError) as exc:
            logger.warning("Autosave failed: %s", exc, exc_info=True)
            return False
        finally:
            self._is_autosaving = False
