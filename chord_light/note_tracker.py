"""Note tracking with a release grace period.

Keeps released notes in the harmony for a short, velocity-dependent
window so chords don't collapse the instant a key is lifted.
"""

from typing import Iterable, Sequence

from . import config
from .notes import MidiNote, TrackedNote


def decay_deadline(velocity: int, max_timeout: float = config.MAX_NOTE_TIMEOUT) -> float:
    """How long a released note keeps sounding, in seconds.

    Ranges from 0.5x max_timeout at velocity 0 up to ~1.5x at velocity 255.
    """
    return (velocity / 256 + 0.5) * max_timeout


def advance(
    live_notes: Iterable[MidiNote],
    previous: Sequence[TrackedNote],
    now: float,
    max_timeout: float = config.MAX_NOTE_TIMEOUT,
) -> tuple[TrackedNote, ...]:
    """Compute the next tracked note set.

    Held keys come first, ordered by pitch, followed by the released notes
    still inside their grace period in their previous order.

    Args:
        live_notes: Keys physically held right now
        previous: Output of the previous call
        now: Current time in seconds
        max_timeout: Base release window in seconds

    Returns:
        The new tracked note set
    """
    live = {note.pitch: note for note in live_notes}
    tracked = [TrackedNote(note) for _, note in sorted(live.items())]

    for entry in previous:
        if entry.pitch in live:
            continue  # re-struck or still held
        if entry.is_held:
            # Just released: start the grace period
            tracked.append(TrackedNote(
                entry.note,
                released_at=now,
                expires_at=now + decay_deadline(entry.note.velocity, max_timeout),
            ))
        elif now < entry.expires_at:
            tracked.append(entry)

    return tuple(tracked)


def newly_struck(
    previous: Sequence[TrackedNote],
    current: Sequence[TrackedNote],
) -> list[MidiNote]:
    """Notes held in ``current`` whose pitch was not tracked in ``previous``."""
    before = {entry.pitch for entry in previous}
    return [entry.note for entry in current if entry.is_held and entry.pitch not in before]


def revived(
    previous: Sequence[TrackedNote],
    current: Sequence[TrackedNote],
) -> list[MidiNote]:
    """Notes that were ringing out in ``previous`` and are held again in ``current``."""
    releasing = {entry.pitch for entry in previous if not entry.is_held}
    return [entry.note for entry in current if entry.is_held and entry.pitch in releasing]


class NoteTracker:
    """Owns the tracked note set between ticks.

    The set is replaced wholesale on every update; entries are never
    mutated in place.
    """

    def __init__(self, max_timeout: float = config.MAX_NOTE_TIMEOUT):
        """Initialize the tracker.

        Args:
            max_timeout: Base release window in seconds
        """
        self.max_timeout = max_timeout
        self._tracked: tuple[TrackedNote, ...] = ()

    def update(self, live_notes: Iterable[MidiNote], now: float) -> tuple[TrackedNote, ...]:
        """Advance the tracked set to ``now`` and return it."""
        self._tracked = advance(live_notes, self._tracked, now, self.max_timeout)
        return self._tracked

    def clear(self) -> tuple[TrackedNote, ...]:
        """Drop every tracked note.

        Returns:
            The notes that were tracked
        """
        tracked = self._tracked
        self._tracked = ()
        return tracked

    @property
    def tracked(self) -> tuple[TrackedNote, ...]:
        return self._tracked

    @property
    def pitches(self) -> list[int]:
        """Tracked pitches, ascending."""
        return sorted(entry.pitch for entry in self._tracked)

    @property
    def is_empty(self) -> bool:
        return not self._tracked

    def __len__(self) -> int:
        return len(self._tracked)
