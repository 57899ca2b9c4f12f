"""Light intensity envelope.

Flashes on attack and decays linearly back to a resting floor:
- every newly struck note adds its velocity to the intensity;
- each intensity tick subtracts a fixed pace while anything is sounding;
- the moment nothing is sounding, intensity snaps to the floor.
"""

from typing import Sequence

from . import config
from .note_tracker import newly_struck, revived
from .notes import TrackedNote


class IntensityController:
    """Owns the light intensity scalar."""

    def __init__(
        self,
        floor: float = config.DEFAULT_INTENSITY,
        decay_pace: float = config.LIGHT_DECAY_PACE,
        retrigger_on_revive: bool = config.RETRIGGER_ON_REVIVE,
    ):
        """Initialize the controller at its floor.

        Args:
            floor: Resting intensity
            decay_pace: Amount removed per tick
            retrigger_on_revive: Also flash when a ringing note is re-struck
        """
        self.floor = floor
        self.decay_pace = decay_pace
        self.retrigger_on_revive = retrigger_on_revive
        self.value = floor
        self._active = False

    def observe(
        self,
        previous: Sequence[TrackedNote],
        current: Sequence[TrackedNote],
    ) -> float:
        """React to one tracked-set transition.

        Must be called exactly once per tracker update so each note-on
        is counted once.

        Args:
            previous: Tracked set before the update
            current: Tracked set after the update

        Returns:
            The new intensity
        """
        if not current:
            self.reset()
            return self.value

        self._active = True
        struck = newly_struck(previous, current)
        if self.retrigger_on_revive:
            struck.extend(revived(previous, current))
        for note in struck:
            self.value += note.velocity
        return self.value

    def tick(self) -> float:
        """Decay one step toward the floor while notes are sounding."""
        if self._active:
            self.value = max(self.value - self.decay_pace, self.floor)
        return self.value

    def reset(self) -> None:
        """Return to the floor and stop decaying."""
        self.value = self.floor
        self._active = False

    @property
    def accent(self) -> float:
        """Intensity of the brighter accent light."""
        return self.value * config.ACCENT_INTENSITY_RATIO

    @property
    def is_active(self) -> bool:
        """Whether the last observed tracked set was non-empty."""
        return self._active
