"""Pointer resolver: which slice sits under the fixed pointer after a spin.

The pointer is fixed at the top of the wheel, -90 degrees in the slice
coordinate space (the unrotated start of slice 0). Rotating the wheel
clockwise by ``r`` moves the wheel point at angle ``a`` to ``a + r`` on
screen, so the pointer reads the wheel at ``-90 - r``.

Boundaries are half-open: a pointer exactly on a boundary belongs to the
slice that starts there, matching ``compute_slices``.
"""

from __future__ import annotations

import math

import numpy as np

from picker.errors import InvalidSliceIndex
from picker.slices import (
    BASELINE_DEGREES,
    FULL_TURN,
    normalize_angle,
    slice_index_at,
    slice_width,
)


POINTER_DEGREES = -90.0

# ulps of a small rotation are finer than ulps of the 0-360 relative angle
_MAX_SNAP_STEPS = 4096


def _check_count(n: int) -> None:
    if n < 1:
        raise InvalidSliceIndex(f"slice count must be >= 1, got {n}")


def resolve_pointer(final_rotation_degrees: float, n: int) -> int:
    """Return the index of the slice under the pointer.

    Args:
        final_rotation_degrees: Total clockwise rotation of the wheel.
        n: Number of slices.

    Returns:
        Slice index in ``[0, n - 1]``.
    """
    _check_count(n)
    return slice_index_at(POINTER_DEGREES - final_rotation_degrees, n)


def rotation_for_slice(
    index: int, n: int, fraction: float = 0.5, turns: int = 0,
) -> float:
    """Rotation that stops the pointer inside slice ``index``.

    With ``fraction=0`` the pointer sits on the start boundary of the slice.
    When the slice width is not a whole number of degrees, the ideal
    rotation can round to the neighbouring slice; the result is then moved
    by single ulps until ``resolve_pointer`` reports ``index``.

    Args:
        index: Target slice.
        n: Number of slices.
        fraction: Position within the slice, 0 = its start boundary,
            0.5 = its middle. Must be in [0, 1).
        turns: Extra full turns to add in front.

    Returns:
        Non-negative rotation in degrees.
    """
    _check_count(n)
    if not 0 <= index < n:
        raise InvalidSliceIndex(f"index {index} out of range for {n} slices")
    if not 0.0 <= fraction < 1.0:
        raise ValueError(f"fraction must be in [0, 1), got {fraction}")

    relative = (index + fraction) * slice_width(n)
    # inverse of both normalization steps in resolve_pointer
    pointer_in_wheel = relative + BASELINE_DEGREES
    rotation = turns * FULL_TURN + normalize_angle(POINTER_DEGREES - pointer_in_wheel)
    # near the start boundary a miss lands in the previous slice; a smaller
    # rotation moves the pointer forward
    direction = -math.inf if fraction < 0.5 else math.inf
    return _snap_to_slice(rotation, index, n, direction)


def _snap_to_slice(rotation: float, index: int, n: int, direction: float) -> float:
    for _ in range(_MAX_SNAP_STEPS):
        if resolve_pointer(rotation, n) == index:
            return rotation
        rotation = math.nextafter(rotation, direction)
    raise ArithmeticError(
        f"could not place pointer in slice {index} of {n} near {rotation!r}"
    )


def _normalize_array(angles: np.ndarray) -> np.ndarray:
    """Array form of ``normalize_angle``."""
    result = np.mod(angles, FULL_TURN)
    return np.where(result >= FULL_TURN, np.nextafter(FULL_TURN, 0.0), result)


def resolve_pointer_array(rotations: np.ndarray, n: int) -> np.ndarray:
    """Vectorized ``resolve_pointer`` over an array of rotations.

    Args:
        rotations: (N,) array of final rotations in degrees.
        n: Number of slices.

    Returns:
        (N,) int64 array of slice indices in ``[0, n - 1]``.
    """
    _check_count(n)
    rotations = np.asarray(rotations, dtype=np.float64)
    pointer_in_wheel = _normalize_array(POINTER_DEGREES - rotations)
    relative = _normalize_array(pointer_in_wheel - BASELINE_DEGREES)
    raw = np.floor(relative / slice_width(n)).astype(np.int64)
    return np.clip(raw, 0, n - 1)
