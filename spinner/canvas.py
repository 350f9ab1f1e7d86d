"""Wheel canvas: QPainter rendering of the selection wheel.

Slices come from ``picker.slices.compute_slices`` so the drawing follows the
same baseline as the pointer resolver. Screen angles are clockwise-positive
(y down); Qt's arc API counts counter-clockwise, hence the sign flips in
``_qt_angle``.
"""

from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QPainter, QPen, QBrush, QColor, QFont, QFontMetrics
from PyQt6.QtWidgets import QWidget

from ui_common import POINTER_COLOR, pointer_polygon, slice_color
from picker.slices import compute_slices


BACKGROUND_COLOR = QColor(28, 28, 36)
OUTLINE_COLOR = QColor(255, 255, 255, 50)
LABEL_BG_COLOR = QColor(0, 0, 0, 64)
WHEEL_SIZE = 280
LABEL_RADIUS_FRACTION = 0.6
POINTER_SIZE = 24


def _qt_angle(degrees):
    """Clockwise screen degrees -> Qt's counter-clockwise 1/16 degree units."""
    return round(-degrees * 16)


class WheelCanvas(QWidget):
    """Draws the item slices rotated by ``rotation`` plus the fixed pointer."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.items = ()
        self.rotation = 0.0
        self.setMinimumSize(WHEEL_SIZE + 40, WHEEL_SIZE + 60)

    def set_items(self, items):
        self.items = tuple(items)
        self.update()

    def set_rotation(self, degrees):
        self.rotation = float(degrees)
        self.update()

    def _wheel_geometry(self):
        w, h = self.width(), self.height()
        radius = min(w, h - POINTER_SIZE * 2, WHEEL_SIZE) / 2
        cx = w / 2
        cy = h / 2 + POINTER_SIZE / 2
        return cx, cy, max(radius, 10.0)

    def _draw_labels(self, painter, slices, radius):
        font = QFont()
        font.setPointSizeF(9)
        font.setBold(True)
        painter.setFont(font)
        metrics = QFontMetrics(font)
        label_r = radius * LABEL_RADIUS_FRACTION

        for sl in slices:
            text = self.items[sl.index]
            text_w = min(metrics.horizontalAdvance(text), radius * 0.7)
            text_h = metrics.height()
            box = QRectF(-text_w / 2 - 6, -text_h / 2 - 3, text_w + 12, text_h + 6)

            painter.save()
            painter.rotate(sl.mid_angle)
            painter.translate(label_r, 0)
            # baseline faces the hub
            painter.rotate(180)
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(LABEL_BG_COLOR))
            painter.drawRoundedRect(box, 6, 6)
            painter.setPen(QColor(255, 255, 255))
            elided = metrics.elidedText(
                text, Qt.TextElideMode.ElideRight, int(text_w) + 1,
            )
            painter.drawText(box, Qt.AlignmentFlag.AlignCenter, elided)
            painter.restore()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), BACKGROUND_COLOR)

        cx, cy, radius = self._wheel_geometry()
        slices = compute_slices(len(self.items))
        disc = QRectF(-radius, -radius, 2 * radius, 2 * radius)

        painter.save()
        painter.translate(cx, cy)
        painter.rotate(self.rotation)

        painter.setPen(Qt.PenStyle.NoPen)
        for sl in slices:
            painter.setBrush(QBrush(slice_color(sl.index)))
            painter.drawPie(disc, _qt_angle(sl.start_angle), _qt_angle(sl.width))

        if slices:
            self._draw_labels(painter, slices, radius)
        painter.restore()

        # Rim
        rim_pen = QPen(OUTLINE_COLOR)
        rim_pen.setWidthF(2.0)
        painter.setPen(rim_pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawEllipse(QPointF(cx, cy), radius, radius)

        # Pointer (not rotated)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(POINTER_COLOR))
        painter.drawPolygon(pointer_polygon(cx, cy - radius + 6, POINTER_SIZE))

        painter.end()
