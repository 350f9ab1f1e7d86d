"""Shared UI helpers used by both the list editor and the wheel screen.

Contains the slice palette, the pointer geometry, and small widget factories.
"""

from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import QColor, QFont, QPolygonF
from PyQt6.QtWidgets import QLabel, QPushButton


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

# orange, blue, green, purple, pink, teal, indigo, yellow, mint, cyan
SLICE_COLORS = [
    QColor(255, 149, 0),
    QColor(0, 122, 255),
    QColor(52, 199, 89),
    QColor(175, 82, 222),
    QColor(255, 45, 85),
    QColor(48, 176, 199),
    QColor(88, 86, 214),
    QColor(255, 204, 0),
    QColor(0, 199, 190),
    QColor(50, 173, 230),
]
SLICE_ALPHA = 217  # 0.85 opacity

POINTER_COLOR = QColor(230, 40, 40)
SECONDARY_TEXT_STYLE = "color: #888;"


def slice_color(index):
    """Fill color for slice ``index``; the palette repeats past 10 items."""
    color = QColor(SLICE_COLORS[index % len(SLICE_COLORS)])
    color.setAlpha(SLICE_ALPHA)
    return color


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

def pointer_polygon(cx, tip_y, size):
    """Downward triangle whose tip touches the wheel rim at (cx, tip_y)."""
    half = size / 2
    return QPolygonF([
        QPointF(cx, tip_y),
        QPointF(cx - half, tip_y - size),
        QPointF(cx + half, tip_y - size),
    ])


# ---------------------------------------------------------------------------
# Widget factories
# ---------------------------------------------------------------------------

def make_icon_button(symbol, tooltip, size=28):
    """Round glyph button used for the add and play actions."""
    button = QPushButton(symbol)
    font = QFont()
    font.setPointSizeF(size * 0.6)
    font.setBold(True)
    button.setFont(font)
    button.setFixedSize(size + 12, size + 12)
    button.setToolTip(tooltip)
    button.setAccessibleName(tooltip)
    button.setCursor(Qt.CursorShape.PointingHandCursor)
    return button


def secondary_label(text=""):
    """Gray hint/footer label."""
    label = QLabel(text)
    label.setStyleSheet(SECONDARY_TEXT_STYLE)
    return label
