"""Spin view: wheel canvas, start/close buttons, and spin wiring.

The view owns no spin logic. It forwards Start to the ``SpinStateMachine``,
animates the canvas toward the returned plan, and reacts to the machine's
phase and settle notifications. This is a QWidget suitable for embedding in
a QStackedWidget.
"""

import logging

from PyQt6.QtCore import Qt, QEasingCurve, QVariantAnimation, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLabel, QMessageBox,
)

from spinner.canvas import WheelCanvas
from ui_common import secondary_label
from picker.slices import normalize_angle
from picker.state_machine import SpinPhase

logger = logging.getLogger(__name__)


class SpinView(QWidget):
    """Complete wheel screen: canvas + controls + state machine wiring."""

    # emitted when the user closes the wheel screen
    closed = pyqtSignal()
    # (index, item) once a spin settles
    settled = pyqtSignal(int, str)

    def __init__(self, machine, scheduler, parent=None):
        super().__init__(parent)
        self.machine = machine
        self.scheduler = scheduler
        self.items = ()
        self._active = False

        self.canvas = WheelCanvas()

        self.hint_label = secondary_label("Tap Start to spin!")
        self.hint_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.start_btn = QPushButton("▶  Start")
        self.start_btn.setDefault(True)
        self.close_btn = QPushButton("Close")

        title = QLabel("Spin")
        title_font = title.font()
        title_font.setPointSizeF(16)
        title_font.setBold(True)
        title.setFont(title_font)

        header = QHBoxLayout()
        header.addWidget(title)
        header.addStretch()
        header.addWidget(self.close_btn)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(16)
        layout.addLayout(header)
        layout.addWidget(self.canvas, stretch=1)
        layout.addWidget(self.hint_label)
        layout.addWidget(self.start_btn, alignment=Qt.AlignmentFlag.AlignHCenter)

        # Animation
        self._animation = QVariantAnimation(self)
        self._animation.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._animation.valueChanged.connect(self.canvas.set_rotation)

        # Wire signals
        self.start_btn.clicked.connect(self.start_spin)
        self.close_btn.clicked.connect(self._on_close)
        machine.add_listener(self._on_settled)
        machine.add_state_listener(self._on_phase_changed)
        self._update_controls()

    # -- Public interface for screen switching --

    def activate(self, items):
        """Called when the wheel screen is shown with a list snapshot."""
        self.items = tuple(items)
        self._active = True
        self.canvas.set_items(self.items)
        self._update_controls()
        # auto-start shortly after the screen appears
        self.scheduler.schedule(
            self.machine.config.autostart_delay_seconds, self._autostart,
        )

    def deactivate(self):
        self._active = False

    def can_close(self):
        return not self.machine.is_spinning

    # -- Spinning --

    def _autostart(self):
        if self._active and not self.machine.is_spinning and self._enough_items():
            self.start_spin()

    def _enough_items(self):
        return len(self.items) >= self.machine.config.min_items

    def start_spin(self):
        result = self.machine.start_spin(self.items)
        if not result.ok:
            logger.info("Start ignored: %s", result.error)
            return

        plan = result.plan
        self._animation.stop()
        # start from the current visual angle so the wheel does not jump
        self._animation.setStartValue(normalize_angle(self.canvas.rotation))
        self._animation.setEndValue(float(plan.final_rotation_degrees))
        self._animation.setDuration(round(plan.duration_seconds * 1000))
        self._animation.start()

    def _on_settled(self, index, item):
        plan = self.machine.state.plan
        self._animation.stop()
        if plan is not None:
            self.canvas.set_rotation(plan.final_rotation_degrees)

        label = item if item is not None else str(index + 1)
        self.settled.emit(index, label)
        if self._active:
            self._show_result(label)
        else:
            self.machine.acknowledge()

    def _show_result(self, label):
        box = QMessageBox(self)
        box.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        box.setWindowTitle("Selected")
        box.setText("Selected")
        box.setInformativeText(label)
        box.setStandardButtons(QMessageBox.StandardButton.Ok)
        box.finished.connect(self._on_result_dismissed)
        box.open()

    def _on_result_dismissed(self, _code):
        if self.machine.phase is SpinPhase.SETTLED:
            self.machine.acknowledge()

    # -- Controls --

    def _on_phase_changed(self, _old, _new):
        self._update_controls()

    def _update_controls(self):
        spinning = self.machine.is_spinning
        if spinning:
            self.start_btn.setText("⌛  Spinning...")
        else:
            self.start_btn.setText("▶  Start")
        self.start_btn.setEnabled(not spinning and self._enough_items())
        self.close_btn.setEnabled(not spinning)
        self.hint_label.setVisible(not spinning)

    def _on_close(self):
        if not self.can_close():
            return
        self.deactivate()
        self.closed.emit()
