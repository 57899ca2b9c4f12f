"""Fixed-interval tasks polled from a single loop.

Time is passed in by the caller, so tasks can be driven by a real clock
in the main loop and by plain numbers in tests.
"""

from typing import Callable, Optional


class PeriodicTask:
    """Runs a callback every ``interval`` seconds when polled.

    Missed periods are not replayed: if the loop falls behind by more
    than one interval, the schedule restarts from the current time.
    """

    def __init__(self, interval: float, callback: Callable[[float], None], name: str = ""):
        """Initialize a stopped task.

        Args:
            interval: Period in seconds (must be positive)
            callback: Called with the current time on every run
            name: Label for status output
        """
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        self.interval = interval
        self.callback = callback
        self.name = name
        self._next_due: Optional[float] = None

    def start(self, now: float) -> None:
        """Schedule the first run one interval from now."""
        self._next_due = now + self.interval

    def stop(self) -> None:
        """Stop running until started again."""
        self._next_due = None

    def poll(self, now: float) -> bool:
        """Run the callback if a period has elapsed.

        Returns:
            True if the callback ran
        """
        if self._next_due is None or now < self._next_due:
            return False

        self.callback(now)
        if self._next_due is None:
            return True  # stopped from inside the callback

        self._next_due += self.interval
        if self._next_due <= now:
            self._next_due = now + self.interval
        return True

    @property
    def running(self) -> bool:
        return self._next_due is not None

    @property
    def next_due(self) -> Optional[float]:
        return self._next_due
