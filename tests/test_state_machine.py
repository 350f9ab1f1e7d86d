"""Tests for picker/state_machine.py: lifecycle, guards, and notifications.

Uses the ManualScheduler fake clock from conftest, so no Qt event loop or
wall-clock time is involved.
"""

import random

import pytest

from picker.config import WheelConfig
from picker.errors import InsufficientItems, SpinInProgress
from picker.resolver import POINTER_DEGREES, resolve_pointer
from picker.slices import compute_slices
from picker.state_machine import SpinPhase, SpinStateMachine


ITEMS = ["A", "B", "C", "D"]


def _recorder(machine):
    calls = []
    machine.add_listener(lambda index, item: calls.append((index, item)))
    return calls


class TestInitialState:

    def test_starts_idle(self, scheduler):
        machine = SpinStateMachine(scheduler)
        assert machine.phase is SpinPhase.IDLE
        assert machine.state.plan is None
        assert not machine.is_spinning


class TestStartRejections:
    """Rejections come back as StartResult failures, not exceptions."""

    @pytest.mark.parametrize("items", [[], ["only"]])
    def test_insufficient_items(self, scheduler, items):
        machine = SpinStateMachine(scheduler, rng=random.Random(0))
        result = machine.start_spin(items)
        assert not result.ok
        assert result.plan is None
        assert isinstance(result.error, InsufficientItems)
        assert machine.phase is SpinPhase.IDLE
        assert scheduler.pending == 0

    def test_bare_count_rejected(self, scheduler):
        machine = SpinStateMachine(scheduler)
        result = machine.start(1)
        assert isinstance(result.error, InsufficientItems)

    def test_second_start_while_spinning(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(0))
        first = machine.start_spin(ITEMS)
        second = machine.start_spin(ITEMS)
        assert first.ok
        assert isinstance(second.error, SpinInProgress)
        assert machine.state.plan is first.plan

    def test_in_progress_checked_before_count(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(0))
        machine.start_spin(ITEMS)
        result = machine.start_spin([])
        assert isinstance(result.error, SpinInProgress)


class TestConcurrencyGuard:
    """Two rapid starts yield one spin and one notification."""

    def test_single_session_single_notification(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(3))
        calls = _recorder(machine)

        results = [machine.start_spin(ITEMS), machine.start_spin(ITEMS)]

        assert [r.ok for r in results] == [True, False]
        assert isinstance(results[1].error, SpinInProgress)
        assert scheduler.pending == 1

        scheduler.advance(60.0)
        assert len(calls) == 1
        assert machine.phase is SpinPhase.SETTLED


class TestSettle:

    def test_worked_example(self, scheduler, fixed_random):
        """Rotation 4 * 360 + 10 (same stop as 370) lands on "D"."""
        machine = SpinStateMachine(scheduler, rng=fixed_random(turns=4, fraction=10 / 360))
        calls = _recorder(machine)

        result = machine.start_spin(ITEMS)
        assert result.plan.final_rotation_degrees == pytest.approx(1450.0)

        scheduler.advance(5.0)
        assert calls == [(3, "D")]
        assert machine.state.index == 3
        assert machine.state.item == "D"

    def test_not_settled_before_duration(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(1))
        calls = _recorder(machine)
        machine.start_spin(ITEMS)

        scheduler.advance(4.99)
        assert machine.phase is SpinPhase.SPINNING
        assert calls == []

        scheduler.advance(0.02)
        assert machine.phase is SpinPhase.SETTLED
        assert len(calls) == 1

    def test_scheduled_after_plan_duration(self, scheduler):
        config = WheelConfig(duration_seconds=3.0)
        machine = SpinStateMachine(scheduler, rng=random.Random(1), config=config)
        machine.start_spin(ITEMS)
        assert scheduler.delays == [pytest.approx(3.0)]

    def test_settle_margin_added(self, scheduler):
        config = WheelConfig(duration_seconds=3.0, settle_margin_seconds=0.05)
        machine = SpinStateMachine(scheduler, rng=random.Random(1), config=config)
        machine.start_spin(ITEMS)
        assert scheduler.delays == [pytest.approx(3.05)]

    def test_start_does_not_block(self, scheduler):
        """start() only registers the timer; nothing fires until advance()."""
        machine = SpinStateMachine(scheduler, rng=random.Random(1))
        machine.start_spin(ITEMS)
        assert scheduler.now == 0.0
        assert machine.is_spinning

    def test_bare_count_reports_no_item(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(2))
        calls = _recorder(machine)
        machine.start(6)
        scheduler.advance(5.0)
        ((index, item),) = calls
        assert 0 <= index < 6
        assert item is None

    def test_uses_snapshot_of_items(self, scheduler, fixed_random):
        items = list(ITEMS)
        machine = SpinStateMachine(scheduler, rng=fixed_random(turns=4, fraction=10 / 360))
        calls = _recorder(machine)
        machine.start_spin(items)
        items.clear()
        scheduler.advance(5.0)
        assert calls == [(3, "D")]

    @pytest.mark.parametrize("seed", range(25))
    def test_reported_slice_is_under_pointer(self, scheduler, seed):
        """The settled index is the slice drawn under the pointer."""
        n = 3 + seed % 8
        labels = [f"item{i}" for i in range(n)]
        machine = SpinStateMachine(scheduler, rng=random.Random(seed))
        calls = _recorder(machine)

        plan = machine.start_spin(labels).plan
        scheduler.advance(plan.duration_seconds)

        ((index, item),) = calls
        assert index == resolve_pointer(plan.final_rotation_degrees, n)
        assert item == labels[index]
        pointer_in_wheel = POINTER_DEGREES - plan.final_rotation_degrees
        assert compute_slices(n)[index].contains(pointer_in_wheel)


class TestAcknowledge:

    def test_settled_to_idle(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(0))
        machine.start_spin(ITEMS)
        scheduler.advance(5.0)
        assert machine.acknowledge() is True
        assert machine.phase is SpinPhase.IDLE
        assert machine.state.index is None

    def test_ignored_when_idle(self, scheduler):
        machine = SpinStateMachine(scheduler)
        assert machine.acknowledge() is False
        assert machine.phase is SpinPhase.IDLE

    def test_ignored_while_spinning(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(0))
        machine.start_spin(ITEMS)
        assert machine.acknowledge() is False
        assert machine.is_spinning

    def test_new_spin_after_acknowledge(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(0))
        calls = _recorder(machine)
        machine.start_spin(ITEMS)
        scheduler.advance(5.0)
        machine.acknowledge()
        assert machine.start_spin(ITEMS).ok
        scheduler.advance(5.0)
        assert len(calls) == 2

    def test_start_from_settled_acknowledges(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(0))
        phases = []
        machine.add_state_listener(lambda old, new: phases.append((old, new)))
        machine.start_spin(ITEMS)
        scheduler.advance(5.0)

        assert machine.start_spin(ITEMS).ok
        assert phases == [
            (SpinPhase.IDLE, SpinPhase.SPINNING),
            (SpinPhase.SPINNING, SpinPhase.SETTLED),
            (SpinPhase.SETTLED, SpinPhase.IDLE),
            (SpinPhase.IDLE, SpinPhase.SPINNING),
        ]

    def test_rejected_start_keeps_result(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(0))
        machine.start_spin(ITEMS)
        scheduler.advance(5.0)
        result = machine.start_spin(["lonely"])
        assert not result.ok
        assert machine.phase is SpinPhase.SETTLED


class TestListeners:

    def test_unsubscribe(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(0))
        calls = []
        unsubscribe = machine.add_listener(lambda i, item: calls.append(i))
        unsubscribe()
        machine.start_spin(ITEMS)
        scheduler.advance(5.0)
        assert calls == []

    def test_failing_listener_does_not_block_others(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(0))

        def broken(index, item):
            raise RuntimeError("boom")

        machine.add_listener(broken)
        calls = _recorder(machine)
        machine.start_spin(ITEMS)
        scheduler.advance(5.0)
        assert len(calls) == 1
        assert machine.phase is SpinPhase.SETTLED

    def test_each_listener_called_once(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(0))
        first, second = _recorder(machine), _recorder(machine)
        machine.start_spin(ITEMS)
        scheduler.advance(100.0)
        assert len(first) == 1
        assert first == second

    def test_state_listener_unsubscribe(self, scheduler):
        machine = SpinStateMachine(scheduler, rng=random.Random(0))
        phases = []
        unsubscribe = machine.add_state_listener(lambda old, new: phases.append(new))
        machine.start_spin(ITEMS)
        unsubscribe()
        scheduler.advance(5.0)
        assert phases == [SpinPhase.SPINNING]
