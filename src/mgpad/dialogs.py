from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QDialog, QHBoxLayout, QLabel, QListWidget, QListWidgetItem, QPushButton, QVBoxLayout


class RecoveryDialog(QDialog):
    """Offers the autosaves found at startup: recover one, or throw them away."""

    def __init__(self, items, recovery_service, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Recover Unsaved Documents")
        self.setModal(True)
        self.recovery_service = recovery_service
        self.selected_recovery = None

        layout = QVBoxLayout()
        layout.addWidget(QLabel("MGPad found documents that were not saved last time:"))
        self.list = QListWidget()
        for item in items:
            row = QListWidgetItem(f"{item.display_name}    {item.timestamp_local}")
            row.setData(Qt.ItemDataRole.UserRole, item)
            row.setToolTip(item.original_path or str(item.autosave_path))
            self.list.addItem(row)
        if self.list.count():
            self.list.setCurrentRow(0)
        self.list.itemDoubleClicked.connect(lambda _: self.recover())
        layout.addWidget(self.list)

        buttons = QHBoxLayout()
        self.recover_button = QPushButton("Recover")
        self.recover_button.clicked.connect(self.recover)
        self.discard_button = QPushButton("Discard Selected")
        self.discard_button.clicked.connect(self.discard_selected)
        discard_all_button = QPushButton("Discard All")
        discard_all_button.clicked.connect(self.discard_all)
        close_button = QPushButton("Close")
        close_button.clicked.connect(self.reject)
        for button in (self.recover_button, self.discard_button, discard_all_button, close_button):
            buttons.addWidget(button)
        layout.addLayout(buttons)
        self.setLayout(layout)
        self.resize(480, 320)
        self._update_buttons()

    def _current(self):
        row = self.list.currentItem()
        return row.data(Qt.ItemDataRole.UserRole) if row else None

    def recover(self):
        item = self._current()
        if item is None:
            return
        self.selected_recovery = item
        self.accept()

    def discard_selected(self):
        item = self._current()
        if item is None:
            return
        self.recovery_service.discard(item)
        self.list.takeItem(self.list.currentRow())
        self._update_buttons()

    def discard_all(self):
        items = [self.list.item(i).data(Qt.ItemDataRole.UserRole) for i in range(self.list.count())]
        self.recovery_service.discard_all(items)
        self.list.clear()
        self.selected_recovery = None
        self.reject()

    def _update_buttons(self):
        has_items = self.list.count() > 0
        self.recover_button.setEnabled(has_items)
        self.discard_button.setEnabled(has_items)
