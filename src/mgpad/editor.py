from PyQt6.QtCore import Qt
from PyQt6.QtGui import QTextCursor
from PyQt6.QtWidgets import QTextEdit

from mgpad.lists import continue_list, indent_level, is_list_line, set_indent_level


class ListAwareTextEdit(QTextEdit):
    """Rich-text editor that keeps typed lists going.

    Enter on a list item starts the next item, Enter on an empty item ends
    the list, and Tab / Shift+Tab move a list item one level in or out.
    """

    def keyPressEvent(self, event):
        key = event.key()
        modifiers = event.modifiers()
        if key in (Qt.Key.Key_Return, Qt.Key.Key_Enter) and not modifiers & Qt.KeyboardModifier.ShiftModifier:
            if self._continue_list():
                return
        elif key == Qt.Key.Key_Tab and not self.textCursor().hasSelection():
            if self._shift_list_item(1):
                return
        elif key == Qt.Key.Key_Backtab:
            if self._shift_list_item(-1):
                return
        super().keyPressEvent(event)

    def _continue_list(self):
        cursor = self.textCursor()
        if cursor.hasSelection():
            return False
        block = cursor.block()
        prefix = continue_list(block.text())
        if prefix is None:
            return False
        if prefix == "":
            # Enter on an empty item: drop its marker instead of adding a line
            cursor.beginEditBlock()
            cursor.setPosition(block.position())
            cursor.movePosition(QTextCursor.MoveOperation.EndOfBlock, QTextCursor.MoveMode.KeepAnchor)
            cursor.removeSelectedText()
            cursor.endEditBlock()
            self.setTextCursor(cursor)
            return True
        cursor.beginEditBlock()
        cursor.insertBlock()
        cursor.insertText(prefix)
        cursor.endEditBlock()
        self.setTextCursor(cursor)
        return True

    def _shift_list_item(self, delta):
        cursor = self.textCursor()
        block = cursor.block()
        text = block.text()
        if not is_list_line(text):
            return False
        new_text = set_indent_level(text, indent_level(text) + delta)
        old_indent = len(text) - len(text.lstrip(" \t"))
        new_indent = len(new_text) - len(new_text.lstrip(" \t"))
        column = cursor.positionInBlock()

        edit = QTextCursor(block)
        edit.beginEditBlock()
        edit.movePosition(QTextCursor.MoveOperation.Right, QTextCursor.MoveMode.KeepAnchor, old_indent)
        edit.insertText(new_text[:new_indent])
        edit.endEditBlock()

        column = max(new_indent, column + new_indent - old_indent)
        cursor.setPosition(block.position() + min(column, block.length() - 1))
        self.setTextCursor(cursor)
        return True
