import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

from mgpad.editor import ListAwareTextEdit  # noqa: E402


@pytest.fixture(scope="module")
def app():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def editor(app) -> ListAwareTextEdit:
    widget = ListAwareTextEdit()
    widget.setAcceptRichText(False)
    yield widget
    widget.deleteLater()


def _place_cursor(editor: ListAwareTextEdit, text: str, position: int) -> None:
    editor.setPlainText(text)
    cursor = editor.textCursor()
    cursor.setPosition(position)
    editor.setTextCursor(cursor)


def test_tab_indents_list_item(editor: ListAwareTextEdit) -> None:
    _place_cursor(editor, "1. item", 3)

    assert editor._shift_list_item(1) is True
    assert editor.toPlainText() == "    1. item"
    assert editor.textCursor().positionInBlock() == 7


def test_shift_tab_outdents_tab_indented_item(editor: ListAwareTextEdit) -> None:
    _place_cursor(editor, "\t- item", 3)

    assert editor._shift_list_item(-1) is True
    assert editor.toPlainText() == "- item"
    assert editor.textCursor().positionInBlock() == 2


def test_shift_tab_stops_at_left_margin(editor: ListAwareTextEdit) -> None:
    _place_cursor(editor, "a) item", 0)

    assert editor._shift_list_item(-1) is True
    assert editor.toPlainText() == "a) item"


def test_shift_ignores_plain_lines(editor: ListAwareTextEdit) -> None:
    _place_cursor(editor, "plain", 2)

    assert editor._shift_list_item(1) is False
    assert editor.toPlainText() == "plain"


def test_enter_continues_numbered_list(editor: ListAwareTextEdit) -> None:
    _place_cursor(editor, "1. first", 8)

    assert editor._continue_list() is True
    assert editor.toPlainText() == "1. first\n2. "


def test_enter_on_empty_item_ends_list(editor: ListAwareTextEdit) -> None:
    _place_cursor(editor, "1. first\n2. ", 12)

    assert editor._continue_list() is True
    assert editor.toPlainText() == "1. first\n"
