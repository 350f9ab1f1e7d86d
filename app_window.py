"""App window: QStackedWidget switching between the list and the wheel.

Owns the item list model and the spin state machine, so a spin in progress
survives screen changes. Hosts the Reset toolbar action and a status bar
with the most recent pick.
"""

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QMainWindow, QStackedWidget, QToolBar, QStatusBar, QLabel, QMessageBox,
)

from editor.view import ListEditorView
from item_list import ItemList
from spinner.view import SpinView
from picker.config import DEFAULT_CONFIG
from picker.scheduler import QtScheduler
from picker.state_machine import SpinStateMachine

logger = logging.getLogger(__name__)


class AppWindow(QMainWindow):
    """Top-level window with the list screen and the wheel screen."""

    # Screen indices
    LIST_SCREEN = 0
    WHEEL_SCREEN = 1

    def __init__(self, config=None, rng=None):
        super().__init__()
        self.config = config if config is not None else DEFAULT_CONFIG
        self.setWindowTitle("Namelista")
        self.resize(420, 640)

        # --- Model and core ---
        self.items = ItemList(
            max_items=self.config.max_items,
            min_spin_items=self.config.min_items,
        )
        self.scheduler = QtScheduler()
        self.machine = SpinStateMachine(self.scheduler, rng=rng, config=self.config)

        # --- Views ---
        self.editor_view = ListEditorView(self.items)
        self.spin_view = SpinView(self.machine, self.scheduler)

        # --- Stacked widget ---
        self.stack = QStackedWidget()
        self.stack.addWidget(self.editor_view)  # index 0
        self.stack.addWidget(self.spin_view)    # index 1
        self.setCentralWidget(self.stack)

        # --- Toolbar ---
        toolbar = QToolBar("List")
        toolbar.setMovable(False)
        self.addToolBar(Qt.ToolBarArea.TopToolBarArea, toolbar)

        self._reset_action = QAction("↺ Reset", self)
        self._reset_action.setToolTip("Reset list")
        self._reset_action.triggered.connect(self._confirm_reset)
        toolbar.addAction(self._reset_action)

        # --- Status bar ---
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._last_pick_label = QLabel()
        self._status_bar.addWidget(self._last_pick_label)

        # --- Wiring ---
        self.editor_view.play_requested.connect(self._show_wheel)
        self.spin_view.closed.connect(self._show_list)
        self.spin_view.settled.connect(self._on_settled)
        self.items.add_listener(self._update_actions)

        self._update_actions()

    def _update_actions(self):
        on_list = self.stack.currentIndex() == self.LIST_SCREEN
        self._reset_action.setEnabled(on_list and len(self.items) > 0)

    def _switch_screen(self, screen):
        if self.stack.currentIndex() == screen:
            return
        self.stack.setCurrentIndex(screen)
        self._update_actions()
        logger.info("Switched to %s screen", "list" if screen == 0 else "wheel")

    def _show_wheel(self):
        if not self.items.can_spin:
            return
        self._switch_screen(self.WHEEL_SCREEN)
        self.spin_view.activate(self.items.snapshot())

    def _show_list(self):
        self._switch_screen(self.LIST_SCREEN)

    def _on_settled(self, index, item):
        self._last_pick_label.setText(f"  Last pick: {item}  ")

    def _confirm_reset(self):
        answer = QMessageBox.question(
            self,
            "Reset",
            "Clear all items?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.Cancel,
            QMessageBox.StandardButton.Cancel,
        )
        if answer == QMessageBox.StandardButton.Yes:
            self.items.clear()
            logger.info("Item list cleared")

    def closeEvent(self, event):
        if self.machine.is_spinning:
            # settle callback is still queued on the event loop
            logger.info("Window closed while spinning; result will be dropped")
        super().closeEvent(event)
