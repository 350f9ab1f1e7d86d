"""Monte-Carlo checks of selection uniformity.

Two simulation paths:
  - ``simulate_planned``: the real ``plan_spin`` + ``resolve_pointer`` pair,
    one spin at a time, with any ``RandomSource``.
  - ``simulate_outcomes``: the same draw vectorized with NumPy, for large
    trial counts.

``uniformity_report`` summarizes outcome counts with per-slice frequencies
and a chi-square goodness-of-fit test against the uniform distribution.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

import numpy as np
from scipy.stats import chisquare

from picker.config import DEFAULT_CONFIG, WheelConfig
from picker.errors import InsufficientItems
from picker.planner import RandomSource, plan_spin
from picker.resolver import resolve_pointer, resolve_pointer_array
from picker.slices import FULL_TURN

logger = logging.getLogger(__name__)


class UniformityReport(NamedTuple):
    """Summary of simulated outcomes for one slice count."""

    counts: np.ndarray        # (n,) int64 outcomes per slice
    frequencies: np.ndarray   # (n,) float64, counts / trials
    max_deviation: float      # largest |frequency - 1/n|
    p_value: float            # chi-square goodness of fit vs uniform


def simulate_planned(
    n: int,
    trials: int,
    rng: RandomSource | None = None,
    config: WheelConfig | None = None,
) -> np.ndarray:
    """Count outcomes of ``trials`` planned spins, one spin at a time."""
    counts = np.zeros(n, dtype=np.int64)
    for _ in range(trials):
        plan = plan_spin(n, rng, config)
        counts[resolve_pointer(plan.final_rotation_degrees, n)] += 1
    return counts


def simulate_outcomes(
    n: int,
    trials: int,
    seed: int | None = None,
    config: WheelConfig | None = None,
) -> np.ndarray:
    """Vectorized spin simulation.

    Draws turns and offsets exactly as ``plan_spin`` does, but for all
    trials at once with a NumPy generator.

    Returns:
        (n,) int64 array of outcome counts.
    """
    if config is None:
        config = DEFAULT_CONFIG
    if n < config.min_items:
        raise InsufficientItems(n, config.min_items)

    gen = np.random.default_rng(seed)
    turns = gen.integers(
        config.min_turns, config.max_turns, size=trials, endpoint=True,
    )
    offsets = gen.random(trials) * FULL_TURN
    rotations = turns * FULL_TURN + offsets
    next_turn = (turns + 1) * FULL_TURN
    rotations = np.where(
        rotations >= next_turn, np.nextafter(next_turn, 0.0), rotations,
    )
    indices = resolve_pointer_array(rotations, n)
    return np.bincount(indices, minlength=n)


def uniformity_report(counts: np.ndarray) -> UniformityReport:
    """Frequencies, worst deviation from 1/n, and chi-square p-value."""
    counts = np.asarray(counts, dtype=np.int64)
    n = len(counts)
    trials = int(counts.sum())
    if n == 0 or trials == 0:
        raise ValueError("need at least one slice and one trial")

    frequencies = counts / trials
    max_deviation = float(np.max(np.abs(frequencies - 1.0 / n)))
    p_value = float(chisquare(counts).pvalue) if n > 1 else 1.0
    logger.debug(
        "Uniformity over %d trials, n=%d: max deviation %.4f, p=%.3f",
        trials, n, max_deviation, p_value,
    )
    return UniformityReport(counts, frequencies, max_deviation, p_value)
