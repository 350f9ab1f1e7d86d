"""Spin state machine: the wheel's lifecycle and the only core entry point.

States:
    IDLE: No spin running; a new spin may start.
    SPINNING: A plan is active and its settle callback is scheduled.
    SETTLED: The spin finished; the selected index is known and has been
        reported. ``acknowledge()`` returns to IDLE.

Rejections (too few items, spin already running) are returned as
``StartResult`` failures rather than raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import NamedTuple

from picker.config import DEFAULT_CONFIG, WheelConfig
from picker.errors import InsufficientItems, SpinError, SpinInProgress
from picker.planner import RandomSource, SpinPlan, plan_spin
from picker.resolver import resolve_pointer
from picker.scheduler import Scheduler

logger = logging.getLogger(__name__)


class SpinPhase(Enum):
    """Lifecycle phases of a single wheel."""
    IDLE = auto()
    SPINNING = auto()
    SETTLED = auto()


@dataclass(frozen=True)
class SpinState:
    """Current phase plus its payload.

    ``plan`` is set while SPINNING and kept once SETTLED; ``index`` and
    ``item`` are only set once SETTLED.
    """

    phase: SpinPhase
    plan: SpinPlan | None = None
    index: int | None = None
    item: str | None = None


IDLE_STATE = SpinState(SpinPhase.IDLE)


class StartResult(NamedTuple):
    """Outcome of a start request: a plan on success, an error otherwise."""

    plan: SpinPlan | None
    error: SpinError | None

    @property
    def ok(self) -> bool:
        return self.error is None


SettleListener = Callable[[int, "str | None"], None]
PhaseListener = Callable[[SpinPhase, SpinPhase], None]


class SpinStateMachine:
    """Owns one wheel's spin lifecycle.

    The settle callback is registered on the injected scheduler, so all
    transitions and notifications happen on the scheduler's event loop.
    """

    VALID_TRANSITIONS: frozenset[tuple[SpinPhase, SpinPhase]] = frozenset({
        (SpinPhase.IDLE, SpinPhase.SPINNING),
        (SpinPhase.SPINNING, SpinPhase.SETTLED),
        (SpinPhase.SETTLED, SpinPhase.IDLE),
    })

    def __init__(
        self,
        scheduler: Scheduler,
        rng: RandomSource | None = None,
        config: WheelConfig | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._rng = rng
        self._config = config if config is not None else DEFAULT_CONFIG
        self._state = IDLE_STATE
        self._labels: tuple[str, ...] | None = None
        self._settle_listeners: list[SettleListener] = []
        self._phase_listeners: list[PhaseListener] = []

    @property
    def state(self) -> SpinState:
        return self._state

    @property
    def phase(self) -> SpinPhase:
        return self._state.phase

    @property
    def is_spinning(self) -> bool:
        return self._state.phase is SpinPhase.SPINNING

    @property
    def config(self) -> WheelConfig:
        return self._config

    # -- Listeners --

    def add_listener(self, callback: SettleListener) -> Callable[[], None]:
        """Register a settle listener, called as ``callback(index, item)``.

        Returns:
            Unsubscribe function.
        """
        self._settle_listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._settle_listeners:
                self._settle_listeners.remove(callback)

        return unsubscribe

    def add_state_listener(self, callback: PhaseListener) -> Callable[[], None]:
        """Register a phase-change listener, called as ``callback(old, new)``."""
        self._phase_listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._phase_listeners:
                self._phase_listeners.remove(callback)

        return unsubscribe

    # -- Transitions --

    def start(self, item_count: int) -> StartResult:
        """Start a spin over ``item_count`` unlabeled slices."""
        return self._start(item_count, None)

    def start_spin(self, items: Sequence[str]) -> StartResult:
        """Start a spin over a snapshot of ``items``.

        The labels are copied, so later changes to ``items`` do not affect
        the running spin or the reported item.
        """
        labels = tuple(items)
        return self._start(len(labels), labels)

    def acknowledge(self) -> bool:
        """Return from SETTLED to IDLE. Returns False in any other phase."""
        if self._state.phase is not SpinPhase.SETTLED:
            logger.warning("acknowledge() ignored in phase %s", self._state.phase.name)
            return False
        self._labels = None
        self._transition(IDLE_STATE)
        return True

    def _start(self, n: int, labels: tuple[str, ...] | None) -> StartResult:
        if self._state.phase is SpinPhase.SPINNING:
            error = SpinInProgress()
            logger.warning("Spin rejected: %s", error)
            return StartResult(None, error)

        try:
            plan = plan_spin(n, self._rng, self._config)
        except InsufficientItems as error:
            logger.warning("Spin rejected: %s", error)
            return StartResult(None, error)

        # Starting again straight from a result implies the result was seen
        if self._state.phase is SpinPhase.SETTLED:
            self.acknowledge()

        self._labels = labels
        self._transition(SpinState(SpinPhase.SPINNING, plan=plan))
        self._scheduler.schedule(
            plan.duration_seconds + self._config.settle_margin_seconds,
            lambda: self._settle(plan),
        )
        logger.info(
            "Spin started: %d items, rotation %.1f deg over %.2f s",
            n, plan.final_rotation_degrees, plan.duration_seconds,
        )
        return StartResult(plan, None)

    def _settle(self, plan: SpinPlan) -> None:
        state = self._state
        if state.phase is not SpinPhase.SPINNING or state.plan is not plan:
            logger.debug("Ignoring stale settle callback")
            return

        index = resolve_pointer(plan.final_rotation_degrees, plan.item_count)
        item = self._labels[index] if self._labels is not None else None
        self._transition(
            SpinState(SpinPhase.SETTLED, plan=plan, index=index, item=item)
        )
        logger.info("Spin settled on index %d (%r)", index, item)

        for listener in list(self._settle_listeners):
            try:
                listener(index, item)
            except Exception:
                logger.exception("Error in settle listener")

    def _transition(self, new_state: SpinState) -> None:
        old_phase = self._state.phase
        if (old_phase, new_state.phase) not in self.VALID_TRANSITIONS:
            raise RuntimeError(
                f"invalid transition {old_phase.name} -> {new_state.phase.name}"
            )
        self._state = new_state
        logger.debug("Spin phase: %s -> %s", old_phase.name, new_state.phase.name)

        for listener in list(self._phase_listeners):
            try:
                listener(old_phase, new_state.phase)
            except Exception:
                logger.exception("Error in phase listener")
