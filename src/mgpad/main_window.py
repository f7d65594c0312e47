import logging
import uuid
from pathlib import Path

from PyQt6.QtCore import QLocale, Qt, QTimer
from PyQt6.QtGui import QAction, QActionGroup, QFont, QKeySequence, QTextCharFormat, QTextCursor
from PyQt6.QtWebEngineWidgets import QWebEngineView
from PyQt6.QtWidgets import QFileDialog, QLabel, QMainWindow, QMessageBox, QSplitter

from mgpad.autosave import AutosaveContext, AutosaveService, autosave_base_name
from mgpad.documents import (
    FILE_FILTERS,
    DocumentState,
    DocumentType,
    coerce_extension,
    document_type_for_path,
    extension_for,
    filter_for,
    read_text_file,
)
from mgpad.editor import ListAwareTextEdit
from mgpad.highlighter import MarkdownHighlighter
from mgpad.lists import parse_list_line, renumber_lines
from mgpad.preview import render_preview_html
from mgpad.rtf import TextRun, merge_runs, read_rtf, write_rtf
from mgpad.selection import summarize_selection
from mgpad.settings import LANGUAGES, toggle_language
from mgpad.themes import get_theme, next_theme
from mgpad.timestamps import timestamp_text

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
STYLE_OVERRIDE = BASE_DIR / "style.qss"

PREVIEW_DEBOUNCE_MS = 150
STATUS_MESSAGE_MS = 3000


class MainWindow(QMainWindow):
    def __init__(self, settings, recovery=None, path=None):
        super().__init__()
        self.settings = settings
        self.state = DocumentState()
        self.session_id = uuid.uuid4().hex[:8]
        self._loading = False
        self.resize(1100, 720)

        # Debounce so the preview does not re-render on every keystroke
        self._preview_timer = QTimer(self)
        self._preview_timer.setSingleShot(True)
        self._preview_timer.setInterval(PREVIEW_DEBOUNCE_MS)
        self._preview_timer.timeout.connect(self._do_update_preview)

        self._setup_ui()
        self._setup_actions()
        self._setup_menu()
        self._setup_toolbar()
        self.setAcceptDrops(True)

        self.autosave = AutosaveService(
            settings.autosave_interval_ms,
            is_dirty=lambda: self.state.dirty,
            context_provider=self._autosave_context,
            write_callback=self._write_for_autosave,
        )

        self.apply_theme(settings.theme)
        self.apply_language(settings.language)
        self.set_preview_visible(settings.show_preview)
        self._new_document()

        if recovery is not None:
            self.load_recovery(recovery)
        elif path:
            self._load_file(path)

        self.autosave.start()

    # --- UI construction ---
    def _setup_ui(self):
        splitter = QSplitter(Qt.Orientation.Horizontal)
        self.editor = ListAwareTextEdit()
        font = QFont()
        font.setPointSize(12)
        self.editor.setFont(font)
        self.editor.textChanged.connect(self._on_text_changed)
        self.editor.document().modificationChanged.connect(self._on_modification_changed)
        self.editor.currentCharFormatChanged.connect(self._sync_format_actions)
        self.highlighter = MarkdownHighlighter(self.editor.document(), self.settings.theme)
        self.preview = QWebEngineView()
        splitter.addWidget(self.editor)
        splitter.addWidget(self.preview)
        splitter.setSizes([650, 450])
        self.setCentralWidget(splitter)

        self.status_bar = self.statusBar()
        self.file_label = QLabel("Untitled")
        self.language_label = QLabel("")
        self.word_count_label = QLabel("0 words")
        self.char_count_label = QLabel("0 chars")
        self.status_bar.addWidget(self.file_label)
        self.status_bar.addPermanentWidget(self.language_label)
        self.status_bar.addPermanentWidget(QLabel("  |  "))
        self.status_bar.addPermanentWidget(self.word_count_label)
        self.status_bar.addPermanentWidget(QLabel("  |  "))
        self.status_bar.addPermanentWidget(self.char_count_label)

    def _action(self, text, slot, shortcut=None, checkable=False):
        action = QAction(text, self)
        if shortcut is not None:
            action.setShortcut(QKeySequence(shortcut))
        action.setCheckable(checkable)
        action.triggered.connect(slot)
        return action

    def _setup_actions(self):
        self.new_action = self._action("New", self.new_file, QKeySequence.StandardKey.New)
        self.open_action = self._action("Open...", self.open_file, QKeySequence.StandardKey.Open)
        self.save_action = self._action("Save", self.save_file, QKeySequence.StandardKey.Save)
        self.save_as_action = self._action("Save As...", self.save_file_as, QKeySequence.StandardKey.SaveAs)
        self.exit_action = self._action("Exit", self.close, QKeySequence.StandardKey.Quit)

        self.timestamp_action = self._action("Insert Timestamp", self.insert_timestamp, "F5")
        self.sum_action = self._action("Sum Selection", self.sum_selection, "Ctrl+Shift+S")
        self.renumber_action = self._action("Renumber Lists", self.renumber_lists, "Ctrl+Shift+L")

        self.bold_action = self._action("Bold", self.set_bold, QKeySequence.StandardKey.Bold, checkable=True)
        self.italic_action = self._action("Italic", self.set_italic, QKeySequence.StandardKey.Italic, checkable=True)
        self.underline_action = self._action(
            "Underline", self.set_underline, QKeySequence.StandardKey.Underline, checkable=True
        )

        self.preview_action = self._action("Markdown Preview", self.set_preview_visible, "Ctrl+Shift+P", checkable=True)
        self.theme_toggle_action = self._action("Toggle Theme", self.toggle_theme, "Ctrl+Shift+T")
        self.language_toggle_action = self._action("Toggle Language", self.toggle_language, "Ctrl+Shift+K")

    def _setup_menu(self):
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        for action in (self.new_action, self.open_action, self.save_action, self.save_as_action):
            file_menu.addAction(action)
        file_menu.addSeparator()
        file_menu.addAction(self.exit_action)

        edit_menu = menu_bar.addMenu("&Edit")
        edit_menu.addAction("Undo", self.editor.undo)
        edit_menu.addAction("Redo", self.editor.redo)
        edit_menu.addSeparator()
        edit_menu.addAction("Cut", self.editor.cut)
        edit_menu.addAction("Copy", self.editor.copy)
        edit_menu.addAction("Paste", self.editor.paste)
        edit_menu.addSeparator()
        edit_menu.addAction(self.timestamp_action)
        edit_menu.addAction(self.sum_action)
        edit_menu.addAction(self.renumber_action)

        format_menu = menu_bar.addMenu("F&ormat")
        for action in (self.bold_action, self.italic_action, self.underline_action):
            format_menu.addAction(action)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.preview_action)
        view_menu.addAction(self.theme_toggle_action)

        language_menu = menu_bar.addMenu("&Language")
        language_menu.addAction(self.language_toggle_action)
        language_menu.addSeparator()
        self.language_group = QActionGroup(self)
        self.language_actions = {}
        for code, name in LANGUAGES.items():
            action = QAction(name, self, checkable=True)
            action.triggered.connect(lambda _, c=code: self.apply_language(c))
            self.language_group.addAction(action)
            language_menu.addAction(action)
            self.language_actions[code] = action

    def _setup_toolbar(self):
        toolbar = self.addToolBar("Main Toolbar")
        toolbar.setMovable(False)
        toolbar.setFloatable(False)
        for action in (self.new_action, self.open_action, self.save_action):
            toolbar.addAction(action)
        toolbar.addSeparator()
        for action in (self.bold_action, self.italic_action, self.underline_action):
            toolbar.addAction(action)
        toolbar.addSeparator()
        toolbar.addAction(self.sum_action)
        toolbar.addAction(self.timestamp_action)
        toolbar.addSeparator()
        toolbar.addAction(self.language_toggle_action)
        toolbar.addAction(self.theme_toggle_action)
        toolbar.addAction(self.preview_action)

    # --- document state ---
    def _on_modification_changed(self, modified):
        if self._loading:
            return
        changed = self.state.mark_dirty() if modified else self.state.mark_clean()
        if changed:
            self._update_window_title()

    def _on_text_changed(self):
        self._update_status_bar()
        self.update_preview()

    def _update_window_title(self):
        self.setWindowTitle(self.state.window_title)

    def _update_status_bar(self):
        text = self.editor.toPlainText()
        words = len(text.split()) if text.strip() else 0
        self.word_count_label.setText(f"{words:,} words")
        self.char_count_label.setText(f"{len(text):,} chars")
        self.file_label.setText(self.state.display_name)

    def _set_document_type(self, document_type):
        rich = document_type is DocumentType.RICH_TEXT
        self.editor.setAcceptRichText(rich)
        for action in (self.bold_action, self.italic_action, self.underline_action):
            action.setEnabled(rich)
        self.highlighter.set_enabled(document_type is DocumentType.MARKDOWN)

    def _set_file(self, path, document_type, dirty=False):
        self.state.set_file(path, document_type)
        if dirty:
            self.state.mark_dirty()
        else:
            self.state.mark_clean()
        self.editor.document().setModified(dirty)
        self._set_document_type(document_type)
        self._update_window_title()
        self._update_status_bar()

    def _replace_contents(self, runs):
        """Swap in new document text without flagging it as an edit."""
        self._loading = True
        try:
            self.editor.clear()
            self.editor.setCurrentCharFormat(QTextCharFormat())
            cursor = QTextCursor(self.editor.document())
            for run in runs:
                cursor.insertText(run.text, _char_format(run))
            self.editor.document().clearUndoRedoStacks()
            self.editor.moveCursor(QTextCursor.MoveOperation.Start)
        finally:
            self._loading = False
        self.update_preview()

    def _new_document(self):
        self._replace_contents([])
        self._set_file(None, DocumentType.RICH_TEXT)

    def maybe_save(self):
        """Ask about unsaved changes; False means the user cancelled."""
        if not self.state.dirty:
            return True
        answer = QMessageBox.question(
            self,
            "Unsaved Changes",
            f"Save changes to {self.state.display_name}?",
            QMessageBox.StandardButton.Save | QMessageBox.StandardButton.Discard | QMessageBox.StandardButton.Cancel,
        )
        if answer == QMessageBox.StandardButton.Save:
            return self.save_file()
        return answer == QMessageBox.StandardButton.Discard

    # --- reading and writing ---
    def _document_runs(self):
        runs = []
        block = self.editor.document().begin()
        while block.isValid():
            text = block.text()
            for fmt_range in block.textFormats():
                fmt = fmt_range.format
                runs.append(TextRun(
                    text[fmt_range.start:fmt_range.start + fmt_range.length],
                    bold=fmt.fontWeight() >= QFont.Weight.Bold.value,
                    italic=fmt.fontItalic(),
                    underline=fmt.fontUnderline(),
                ))
            block = block.next()
            if block.isValid():
                runs.append(TextRun("\n"))
        return merge_runs(runs)

    def _write_document(self, path, document_type):
        if document_type is DocumentType.RICH_TEXT:
            data = write_rtf(self._document_runs())
        else:
            data = self.editor.toPlainText()
        with open(path, 'w', encoding='utf-8') as f:
            f.write(data)

    def _read_document(self, path, document_type):
        data = read_text_file(path)
        if document_type is DocumentType.RICH_TEXT:
            return read_rtf(data)
        return [TextRun(data)]

    def _load_file(self, file_path):
        document_type = document_type_for_path(file_path)
        try:
            runs = self._read_document(file_path, document_type)
        except (OSError, ValueError) as e:
            logger.exception("Failed to load %s", file_path)
            QMessageBox.critical(self, "Error", f"Failed to load document:\n{e}")
            return False
        self._replace_contents(runs)
        self._set_file(file_path, document_type)
        logger.info("Opened %s as %s", file_path, document_type.value)
        return True

    def _save_to(self, file_path):
        document_type = document_type_for_path(file_path)
        try:
            self._write_document(file_path, document_type)
        except (OSError, ValueError) as e:
            logger.exception("Failed to save %s", file_path)
            QMessageBox.critical(self, "Error", f"Failed to save document:\n{e}")
            return False
        self._set_file(file_path, document_type)
        self.autosave.on_manual_save()
        self.status_bar.showMessage("Saved!", 2000)
        logger.info("Saved %s", file_path)
        return True

    def load_recovery(self, item):
        """Open an autosave copy as an unsaved edit of its original document."""
        try:
            runs = self._read_document(item.autosave_path, item.document_type)
        except (OSError, ValueError) as e:
            logger.exception("Failed to recover %s", item.autosave_path)
            QMessageBox.critical(self, "Error", f"Failed to recover document:\n{e}")
            return False
        self._replace_contents(runs)
        path = None if item.is_untitled else item.original_path
        document_type = document_type_for_path(path) if path else item.document_type
        self._set_file(path, document_type, dirty=True)
        # the recovered copy is dropped once this session saves or autosaves
        self.autosave.last_autosave_path = item.autosave_path
        self.autosave.last_metadata_path = item.metadata_path
        return True

    def _autosave_context(self):
        document_type = self.state.document_type
        return AutosaveContext(
            base_name=autosave_base_name(self.state.path, self.session_id),
            document_type=document_type,
            extension=extension_for(document_type),
            original_path=self.state.path,
            is_untitled=self.state.path is None,
        )

    def _write_for_autosave(self, path, document_type):
        self._write_document(path, document_type)
        return True

    # --- file actions ---
    def new_file(self):
        if self.maybe_save():
            self._new_document()

    def open_file(self):
        if not self.maybe_save():
            return
        start_dir = str(Path(self.state.path).parent) if self.state.path else str(Path.home())
        file_path, _ = QFileDialog.getOpenFileName(self, "Open Document", start_dir, ";;".join(FILE_FILTERS))
        if file_path:
            self._load_file(file_path)

    def save_file(self):
        if self.state.path:
            return self._save_to(self.state.path)
        return self.save_file_as()

    def save_file_as(self):
        document_type = self.state.document_type
        if self.state.path:
            start = self.state.path
        else:
            start = str(Path.home() / ("Untitled" + extension_for(document_type)))
        file_path, selected_filter = QFileDialog.getSaveFileName(
            self, "Save Document", start, ";;".join(FILE_FILTERS), filter_for(document_type)
        )
        if not file_path:
            return False
        return self._save_to(coerce_extension(file_path, selected_filter))

    def closeEvent(self, event):
        if not self.maybe_save():
            event.ignore()
            return
        self.autosave.stop()
        self.autosave.delete_current_files()
        self.settings.save()
        event.accept()

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            for url in event.mimeData().urls():
                if url.isLocalFile():
                    event.acceptProposedAction()
                    return
        event.ignore()

    def dropEvent(self, event):
        for url in event.mimeData().urls():
            if url.isLocalFile():
                if self.maybe_save():
                    self._load_file(url.toLocalFile())
                break

    # --- editing actions ---
    def insert_timestamp(self):
        self.editor.textCursor().insertText(timestamp_text())

    def sum_selection(self):
        cursor = self.editor.textCursor()
        if not cursor.hasSelection():
            self.status_bar.showMessage("Select some text containing numbers first.", STATUS_MESSAGE_MS)
            return
        result = summarize_selection(cursor.selection().toPlainText())
        if result is None:
            self.status_bar.showMessage("No numbers found in the selection.", STATUS_MESSAGE_MS)
            return
        cursor.setPosition(cursor.selectionEnd())
        cursor.insertText(result.formatted)
        self.editor.setTextCursor(cursor)
        self.status_bar.showMessage(f"Sum of {result.count} numbers: {result.formatted}", STATUS_MESSAGE_MS)

    def renumber_lists(self):
        document = self.editor.document()
        blocks = []
        block = document.begin()
        while block.isValid():
            blocks.append(block)
            block = block.next()
        old_lines = [block.text() for block in blocks]
        new_lines = renumber_lines(old_lines)
        cursor = QTextCursor(document)
        cursor.beginEditBlock()
        for block, old, new in reversed(list(zip(blocks, old_lines, new_lines))):
            if old == new:
                continue
            # only the marker differs; swapping just the prefix keeps the content's formatting
            old_prefix = parse_list_line(old).prefix
            new_prefix = parse_list_line(new).prefix
            cursor.setPosition(block.position())
            cursor.setPosition(block.position() + len(old_prefix), QTextCursor.MoveMode.KeepAnchor)
            cursor.insertText(new_prefix)
        cursor.endEditBlock()

    def _merge_format(self, fmt):
        self.editor.mergeCurrentCharFormat(fmt)
        self.editor.setFocus()

    def set_bold(self, checked):
        fmt = QTextCharFormat()
        fmt.setFontWeight((QFont.Weight.Bold if checked else QFont.Weight.Normal).value)
        self._merge_format(fmt)

    def set_italic(self, checked):
        fmt = QTextCharFormat()
        fmt.setFontItalic(checked)
        self._merge_format(fmt)

    def set_underline(self, checked):
        fmt = QTextCharFormat()
        fmt.setFontUnderline(checked)
        self._merge_format(fmt)

    def _sync_format_actions(self, fmt):
        self.bold_action.setChecked(fmt.fontWeight() >= QFont.Weight.Bold.value)
        self.italic_action.setChecked(fmt.fontItalic())
        self.underline_action.setChecked(fmt.fontUnderline())

    # --- view, theme and language ---
    def update_preview(self):
        if self.preview_action.isChecked():
            self._preview_timer.start()

    def _do_update_preview(self):
        html = render_preview_html(self.editor.toPlainText(), self.settings.theme, self.state.display_name)
        self.preview.setHtml(html)

    def set_preview_visible(self, visible):
        self.settings.show_preview = bool(visible)
        self.preview.setVisible(bool(visible))
        self.preview_action.setChecked(bool(visible))
        if visible:
            self._do_update_preview()

    def apply_theme(self, name):
        theme = get_theme(name)
        self.settings.theme = theme.name
        stylesheet = theme.stylesheet()
        if STYLE_OVERRIDE.exists():
            stylesheet += STYLE_OVERRIDE.read_text(encoding='utf-8')
        self.setStyleSheet(stylesheet)
        self.highlighter.set_theme(theme.name)
        if self.preview_action.isChecked():
            self._do_update_preview()

    def toggle_theme(self):
        self.apply_theme(next_theme(self.settings.theme))

    def apply_language(self, code):
        if code not in LANGUAGES:
            logger.warning("Unknown input language %s", code)
            return
        self.settings.language = code
        self.editor.setLocale(QLocale(code.replace("-", "_")))
        self.language_actions[code].setChecked(True)
        self.language_label.setText(LANGUAGES[code])
        self.status_bar.showMessage(f"Input language: {LANGUAGES[code]}", STATUS_MESSAGE_MS)

    def toggle_language(self):
        self.apply_language(toggle_language(self.settings.language))


def _char_format(run):
    fmt = QTextCharFormat()
    fmt.setFontWeight((QFont.Weight.Bold if run.bold else QFont.Weight.Normal).value)
    fmt.setFontItalic(run.italic)
    fmt.setFontUnderline(run.underline)
    return fmt
