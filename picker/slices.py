"""Slice geometry for the selection wheel.

Pure functions that partition the circle into equal slices, one per item.
The same convention is shared by the renderer and the pointer resolver, so
a slice that is drawn under the pointer is the slice that gets reported.

Convention: angles in degrees, 0 = 3 o'clock, positive = clockwise on screen
(y axis pointing down). Slice 0 starts at the baseline, -90 degrees, which is
12 o'clock. Slice i covers the half-open range

    [BASELINE + i * width, BASELINE + (i + 1) * width)

with width = 360 / n.
"""

from __future__ import annotations

import math
from typing import NamedTuple


FULL_TURN = 360.0
BASELINE_DEGREES = -90.0


def normalize_angle(angle: float, modulus: float = FULL_TURN) -> float:
    """Map ``angle`` into ``[0, modulus)``.

    Python's ``%`` already returns a non-negative result for negative
    inputs, but a tiny negative angle such as ``-1e-17`` rounds up to
    ``modulus`` itself. That case maps to the largest float below
    ``modulus``, which is where the unrounded angle lies.
    """
    result = angle % modulus
    if result >= modulus:
        return math.nextafter(modulus, 0.0)
    return result


def slice_width(n: int) -> float:
    """Angular width of one slice for ``n`` items (0 for an empty wheel)."""
    if n <= 0:
        return 0.0
    return FULL_TURN / n


class Slice(NamedTuple):
    """One equal angular partition of the wheel.

    Attributes:
        index: Position of the item in the list (0-based).
        start_angle: Start of the slice in degrees, continuous from the
            baseline (slice 0 starts at -90).
        end_angle: End of the slice (exclusive), ``start_angle + width``.
    """

    index: int
    start_angle: float
    end_angle: float

    @property
    def width(self) -> float:
        width = self.end_angle - self.start_angle
        # a normalized slice may wrap past 0
        if width <= 0.0:
            width += FULL_TURN
        return width

    @property
    def mid_angle(self) -> float:
        """Angle through the middle of the slice, used for label placement."""
        return self.start_angle + self.width / 2.0

    def normalized(self) -> Slice:
        """Same slice with both angles reduced into [0, 360)."""
        return Slice(
            self.index,
            normalize_angle(self.start_angle),
            normalize_angle(self.end_angle),
        )

    def contains(self, angle: float) -> bool:
        """True if ``angle`` (any turn) falls inside this half-open slice.

        Membership goes through ``slice_index_at``, the same arithmetic the
        pointer resolver uses, so every angle belongs to exactly one slice.
        """
        n = round(FULL_TURN / self.width)
        return slice_index_at(angle, n) == self.index


def slice_index_at(angle: float, n: int) -> int:
    """Index of the slice containing wheel angle ``angle`` for ``n`` slices.

    The angle is reduced into [0, 360), measured from the baseline, and
    floored to a slice. The result is clamped to ``[0, n - 1]`` because
    the relative angle can sit a rounding error below 360.
    """
    relative = normalize_angle(normalize_angle(angle) - BASELINE_DEGREES)
    raw_index = math.floor(relative / slice_width(n))
    return max(0, min(n - 1, raw_index))


def compute_slices(n: int) -> list[Slice]:
    """Partition the wheel into ``n`` equal slices starting at the baseline.

    Args:
        n: Number of items. ``n <= 0`` yields an empty wheel.

    Returns:
        List of ``n`` slices in item order, contiguous and covering exactly
        one full turn.
    """
    if n <= 0:
        return []

    width = slice_width(n)
    return [
        Slice(
            index=i,
            start_angle=BASELINE_DEGREES + i * width,
            end_angle=BASELINE_DEGREES + (i + 1) * width,
        )
        for i in range(n)
    ]
