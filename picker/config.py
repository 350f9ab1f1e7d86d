"""Wheel configuration: timing, turn range, and item-count bounds."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WheelConfig:
    """Tunable parameters shared by the planner, state machine, and UI."""

    duration_seconds: float = 5.0
    min_turns: int = 4
    max_turns: int = 7
    min_items: int = 2
    max_items: int = 10
    settle_margin_seconds: float = 0.0
    autostart_delay_seconds: float = 0.25

    def __post_init__(self) -> None:
        if self.duration_seconds <= 0:
            raise ValueError(
                f"duration_seconds must be positive, got {self.duration_seconds}"
            )
        if self.min_turns < 0:
            raise ValueError(f"min_turns must be >= 0, got {self.min_turns}")
        if self.max_turns < self.min_turns:
            raise ValueError(
                f"max_turns ({self.max_turns}) < min_turns ({self.min_turns})"
            )
        if self.min_items < 2:
            raise ValueError(f"min_items must be >= 2, got {self.min_items}")
        if self.max_items < self.min_items:
            raise ValueError(
                f"max_items ({self.max_items}) < min_items ({self.min_items})"
            )
        if self.settle_margin_seconds < 0 or self.autostart_delay_seconds < 0:
            raise ValueError("delays must be non-negative")


DEFAULT_CONFIG = WheelConfig()
