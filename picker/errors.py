"""Error kinds reported by the wheel core."""


class SpinError(Exception):
    """Base class for recoverable wheel errors."""


class InsufficientItems(SpinError):
    """Fewer items than a spin needs."""

    def __init__(self, count: int, required: int = 2):
        super().__init__(f"need at least {required} items to spin, got {count}")
        self.count = count
        self.required = required


class SpinInProgress(SpinError):
    """A spin was requested while another is still running."""

    def __init__(self):
        super().__init__("a spin is already in progress")


class InvalidSliceIndex(SpinError):
    """A slice index or count outside the wheel's valid range."""
