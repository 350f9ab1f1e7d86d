"""Item list model: the labels the wheel is built from.

Handles trimming, the maximum item count, and change notification. The
wheel core only ever sees a snapshot of this list, taken at spin start.
"""

import logging

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 10


class ItemList:
    """Ordered list of non-empty labels, capped at ``max_items``."""

    def __init__(self, max_items=DEFAULT_MAX_ITEMS, min_spin_items=2):
        if max_items < 1:
            raise ValueError(f"max_items must be >= 1, got {max_items}")
        self.max_items = max_items
        self.min_spin_items = min_spin_items
        self._items = []
        self._listeners = []

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    @property
    def is_full(self):
        return len(self._items) >= self.max_items

    @property
    def can_spin(self):
        return len(self._items) >= self.min_spin_items

    @staticmethod
    def normalize(text):
        """Strip surrounding whitespace and newlines."""
        return (text or "").strip()

    def can_add(self, text):
        return bool(self.normalize(text)) and not self.is_full

    def add(self, text):
        """Append a trimmed label. Returns it, or None if rejected."""
        label = self.normalize(text)
        if not label or self.is_full:
            logger.debug("Rejected item %r (count=%d)", text, len(self._items))
            return None
        self._items.append(label)
        logger.debug("Added item %r", label)
        self._notify()
        return label

    def remove(self, index):
        """Remove the item at ``index``. Out-of-range indices are a no-op."""
        if not 0 <= index < len(self._items):
            return None
        label = self._items.pop(index)
        logger.debug("Removed item %r at %d", label, index)
        self._notify()
        return label

    def clear(self):
        if not self._items:
            return
        self._items.clear()
        logger.debug("Cleared item list")
        self._notify()

    def snapshot(self):
        """Immutable copy of the current labels."""
        return tuple(self._items)

    def add_listener(self, callback):
        """Call ``callback()`` after every mutation. Returns an unsubscribe function."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self):
        for callback in list(self._listeners):
            callback()
