from datetime import datetime
from pathlib import Path

import pytest
from PyQt6.QtCore import QSettings

from mgpad.settings import (
    DEFAULT_AUTOSAVE_INTERVAL_MS,
    LANGUAGES,
    MIN_AUTOSAVE_INTERVAL_MS,
    EditorSettings,
    toggle_language,
)
from mgpad.themes import THEMES, get_theme, next_theme
from mgpad.timestamps import timestamp_text


@pytest.fixture
def store(tmp_path: Path) -> QSettings:
    return QSettings(str(tmp_path / "mgpad.ini"), QSettings.Format.IniFormat)


def test_defaults_when_nothing_stored(store: QSettings) -> None:
    settings = EditorSettings.load(store)

    assert settings == EditorSettings()
    assert settings.autosave_interval_ms == DEFAULT_AUTOSAVE_INTERVAL_MS


def test_save_then_load(store: QSettings) -> None:
    EditorSettings(theme="dark", language="ko-KR", autosave_interval_ms=30_000, show_preview=False).save(store)

    loaded = EditorSettings.load(store)

    assert loaded == EditorSettings(theme="dark", language="ko-KR", autosave_interval_ms=30_000, show_preview=False)


def test_invalid_values_fall_back(store: QSettings, caplog) -> None:
    store.setValue("view/theme", "neon")
    store.setValue("input/language", "xx-XX")
    store.setValue("autosave/interval_ms", 10)

    loaded = EditorSettings.load(store)

    assert loaded.theme == EditorSettings().theme
    assert loaded.language == EditorSettings().language
    assert loaded.autosave_interval_ms == MIN_AUTOSAVE_INTERVAL_MS
    assert "neon" in caplog.text


def test_toggle_language_switches_between_first_two() -> None:
    first, second = list(LANGUAGES)[:2]
    assert toggle_language(first) == second
    assert toggle_language(second) == first
    assert toggle_language("de-DE") == first


def test_theme_helpers() -> None:
    assert next_theme("light") == "dark"
    assert next_theme("dark") == "light"
    assert next_theme("unknown") == "dark"
    assert get_theme("missing") is THEMES["light"]
    assert THEMES["dark"].accent in THEMES["dark"].stylesheet()


def test_timestamp_text() -> None:
    assert timestamp_text(datetime(2026, 10, 19, 9, 5)) == "2026-10-19 09:05"
    assert timestamp_text(datetime(2026, 10, 19, 9, 5), "%H:%M") == "09:05"
    assert len(timestamp_text()) == len("2026-10-19 09:05")
