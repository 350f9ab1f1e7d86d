"""List editor view: add, remove, and review the items for the wheel.

Renders an ``ItemList`` and emits ``play_requested`` when the user asks to
spin. All list rules (trimming, max count) live in the model; the view only
mirrors ``can_add`` / ``can_spin`` into button states.
"""

import logging

from PyQt6.QtCore import Qt, QTimer, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLineEdit, QListWidget,
    QListWidgetItem, QLabel, QPushButton,
)

from ui_common import make_icon_button, secondary_label

logger = logging.getLogger(__name__)


class ItemRow(QWidget):
    """One numbered list row with a delete button."""

    def __init__(self, index, text, on_delete, parent=None):
        super().__init__(parent)
        number = secondary_label(f"{index + 1}.")
        label = QLabel(text)
        label.setWordWrap(True)

        delete_btn = QPushButton("🗑")
        delete_btn.setFlat(True)
        delete_btn.setStyleSheet("color: #e03c3c;")
        delete_btn.setAccessibleName(f"Delete item {index + 1}")
        delete_btn.clicked.connect(lambda: on_delete(index))

        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.addWidget(number)
        layout.addWidget(label, stretch=1)
        layout.addWidget(delete_btn)


class ListEditorView(QWidget):
    """Text field, add/play buttons, item rows, and the count footer."""

    play_requested = pyqtSignal()

    def __init__(self, item_list, parent=None):
        super().__init__(parent)
        self.item_list = item_list

        self.input = QLineEdit()
        self.input.setPlaceholderText("Add item")
        self.add_btn = make_icon_button("+", "Add item")
        self.play_btn = make_icon_button("▶", "Play spinning wheel")

        input_row = QHBoxLayout()
        input_row.setSpacing(12)
        input_row.addWidget(self.input, stretch=1)
        input_row.addWidget(self.add_btn)
        input_row.addWidget(self.play_btn)

        self.empty_title = secondary_label("Add items to your list")
        self.empty_hint = secondary_label(
            f"Up to {item_list.max_items} items. "
            f"Need at least {item_list.min_spin_items} to play."
        )
        for label in (self.empty_title, self.empty_hint):
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.list_widget = QListWidget()
        self.list_widget.setSelectionMode(QListWidget.SelectionMode.NoSelection)

        self.count_label = secondary_label()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 8)
        layout.setSpacing(16)
        layout.addLayout(input_row)
        layout.addWidget(self.empty_title)
        layout.addWidget(self.empty_hint)
        layout.addWidget(self.list_widget, stretch=1)
        layout.addWidget(self.count_label)

        # Wire signals
        self.input.textChanged.connect(self._update_controls)
        self.input.returnPressed.connect(self._add_item)
        self.add_btn.clicked.connect(self._add_item)
        self.play_btn.clicked.connect(self._on_play)
        item_list.add_listener(self.refresh)

        self.refresh()

    def refresh(self):
        """Rebuild the rows from the model."""
        self.list_widget.clear()
        for index, text in enumerate(self.item_list):
            row = ItemRow(index, text, self._delete_item)
            entry = QListWidgetItem(self.list_widget)
            entry.setSizeHint(row.sizeHint())
            self.list_widget.setItemWidget(entry, row)

        empty = len(self.item_list) == 0
        self.empty_title.setVisible(empty)
        self.empty_hint.setVisible(empty)
        self.count_label.setText(
            f"{len(self.item_list)}/{self.item_list.max_items} items"
        )
        self._update_controls()

    def _update_controls(self):
        can_add = self.item_list.can_add(self.input.text())
        self.add_btn.setEnabled(can_add)
        self.play_btn.setEnabled(self.item_list.can_spin)

    def _add_item(self):
        if self.item_list.add(self.input.text()) is not None:
            self.input.clear()

    def _delete_item(self, index):
        # rows are rebuilt on removal; let the clicked row finish first
        QTimer.singleShot(0, lambda: self.item_list.remove(index))

    def _on_play(self):
        if self.item_list.can_spin:
            self.play_requested.emit()
