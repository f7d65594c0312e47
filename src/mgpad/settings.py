"""Persistent editor preferences, stored through QSettings."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from PyQt6.QtCore import QSettings

from mgpad.documents import APP_NAME
from mgpad.themes import DEFAULT_THEME, THEMES

logger = logging.getLogger(__name__)

APP_ORG = APP_NAME

# Input languages offered by the Language menu, in menu order.
# The first two are the pair the toolbar toggle switches between.
LANGUAGES = {
    "en-US": "English",
    "ko-KR": "Korean",
    "ja-JP": "Japanese",
    "de-DE": "German",
}
DEFAULT_LANGUAGE = "en-US"

DEFAULT_AUTOSAVE_INTERVAL_MS = 60_000
MIN_AUTOSAVE_INTERVAL_MS = 5_000


def toggle_language(code: str) -> str:
    first, second = list(LANGUAGES)[:2]
    return second if code == first else first


@dataclass
class EditorSettings:
    theme: str = DEFAULT_THEME
    language: str = DEFAULT_LANGUAGE
    autosave_interval_ms: int = DEFAULT_AUTOSAVE_INTERVAL_MS
    show_preview: bool = True

    @classmethod
    def load(cls, store: Optional[QSettings] = None) -> "EditorSettings":
        store = store if store is not None else QSettings(APP_ORG, APP_NAME)
        defaults = cls()
        theme = store.value("view/theme", defaults.theme, type=str)
        if theme not in THEMES:
            logger.warning("Unknown theme %r in settings, using %s", theme, defaults.theme)
            theme = defaults.theme
        language = store.value("input/language", defaults.language, type=str)
        if language not in LANGUAGES:
            logger.warning("Unknown language %r in settings, using %s", language, defaults.language)
            language = defaults.language
        interval = store.value("autosave/interval_ms", defaults.autosave_interval_ms, type=int)
        return cls(
            theme=theme,
            language=language,
            autosave_interval_ms=max(MIN_AUTOSAVE_INTERVAL_MS, interval),
            show_preview=store.value("view/show_preview", defaults.show_preview, type=bool),
        )

    def save(self, store: Optional[QSettings] = None) -> None:
        store = store if store is not None else QSettings(APP_ORG, APP_NAME)
        store.setValue("view/theme", self.theme)
        store.setValue("input/language", self.language)
        store.setValue("autosave/interval_ms", self.autosave_interval_ms)
        store.setValue("view/show_preview", self.show_preview)
        store.sync()
