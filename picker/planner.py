"""Spin planner: randomized final rotation and duration for one spin.

The final rotation is ``turns * 360 + offset``. Only ``offset`` decides where
the wheel stops (modulo 360), and it is drawn uniformly over the full circle,
so every slice is selected with probability ``width / 360 = 1 / n``. The
integer ``turns`` term only changes how many visible rotations the animation
makes.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Protocol

from picker.config import DEFAULT_CONFIG, WheelConfig
from picker.errors import InsufficientItems
from picker.slices import FULL_TURN

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Uniform random source. ``random.Random`` satisfies this protocol."""

    def randint(self, a: int, b: int) -> int:
        """Return a uniform integer in ``[a, b]`` (inclusive)."""
        ...

    def random(self) -> float:
        """Return a uniform float in ``[0, 1)``."""
        ...


@dataclass(frozen=True)
class SpinPlan:
    """Target rotation and duration for a single spin."""

    final_rotation_degrees: float
    duration_seconds: float
    item_count: int

    @property
    def turns(self) -> int:
        """Number of full turns before the final partial turn."""
        return int(self.final_rotation_degrees // FULL_TURN)

    @property
    def stop_offset(self) -> float:
        """Stopping position within the last turn, in [0, 360)."""
        return self.final_rotation_degrees - self.turns * FULL_TURN


def plan_spin(
    n: int,
    rng: RandomSource | None = None,
    config: WheelConfig | None = None,
) -> SpinPlan:
    """Draw a spin plan for a wheel with ``n`` items.

    Args:
        n: Number of items on the wheel (snapshot taken at spin start).
        rng: Random source. Defaults to the module-level ``random`` functions.
        config: Turn range and duration. Defaults to ``DEFAULT_CONFIG``.

    Raises:
        InsufficientItems: if ``n`` is below ``config.min_items``.
    """
    if config is None:
        config = DEFAULT_CONFIG
    if n < config.min_items:
        raise InsufficientItems(n, config.min_items)
    if rng is None:
        rng = random

    turns = rng.randint(config.min_turns, config.max_turns)
    offset = rng.random() * FULL_TURN
    # random() < 1, but guard the product against rounding up to a full turn
    if offset >= FULL_TURN:
        offset = 0.0

    final_rotation = turns * FULL_TURN + offset
    # the sum can round up to the next whole turn even when offset < 360
    next_turn = (turns + 1) * FULL_TURN
    if final_rotation >= next_turn:
        final_rotation = math.nextafter(next_turn, 0.0)

    plan = SpinPlan(
        final_rotation_degrees=final_rotation,
        duration_seconds=config.duration_seconds,
        item_count=n,
    )
    logger.debug(
        "Planned spin: n=%d turns=%d offset=%.3f duration=%.2fs",
        n, turns, offset, plan.duration_seconds,
    )
    return plan
