"""Shared fixtures: a manual clock scheduler and fixed random sources."""

import heapq
import itertools

import pytest


class ManualScheduler:
    """Deterministic stand-in for the event-loop scheduler.

    Callbacks run only when ``advance`` moves the clock past their due time,
    in due-time order (ties in registration order).
    """

    def __init__(self):
        self.now = 0.0
        self._queue = []
        self._seq = itertools.count()
        self.delays = []

    def schedule(self, after_seconds, callback):
        self.delays.append(after_seconds)
        heapq.heappush(self._queue, (self.now + after_seconds, next(self._seq), callback))

    @property
    def pending(self):
        return len(self._queue)

    def advance(self, seconds):
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, callback = heapq.heappop(self._queue)
            self.now = due
            callback()
        self.now = target


class FixedRandom:
    """RandomSource returning preset values."""

    def __init__(self, turns=4, fraction=0.0):
        self.turns = turns
        self.fraction = fraction

    def randint(self, a, b):
        return self.turns

    def random(self):
        return self.fraction


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def fixed_random():
    return FixedRandom
