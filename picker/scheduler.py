"""Scheduler abstraction for delayed callbacks on the host event loop.

The state machine never sleeps: it registers a one-shot callback and returns.
In the application the callback runs on the Qt event loop; tests inject a
manual clock instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from PyQt6.QtCore import QTimer

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Registers a callback to run once after a delay."""

    def schedule(self, after_seconds: float, callback: Callable[[], None]) -> None:
        ...


class QtScheduler:
    """Scheduler backed by ``QTimer.singleShot`` on the running event loop."""

    def schedule(self, after_seconds: float, callback: Callable[[], None]) -> None:
        msec = max(0, round(after_seconds * 1000))
        logger.debug("Scheduling callback in %d ms", msec)
        QTimer.singleShot(msec, callback)
