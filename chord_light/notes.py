"""Note model shared by the tracker, reducer and MIDI input.

Live notes are validated once, when they enter the core. Everything
downstream assumes well-formed pitches and velocities.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

MIDI_PITCH_MAX = 127
# Velocities are accepted on either the 7-bit or the 8-bit scale
VELOCITY_MAX = 255

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


class InvalidInput(ValueError):
    """Raised when malformed note data reaches the core."""


@dataclass(frozen=True)
class MidiNote:
    """A physically held key: MIDI note number and strike velocity."""
    pitch: int
    velocity: int


@dataclass(frozen=True)
class TrackedNote:
    """A note contributing to the current harmony.

    ``released_at`` is None while the key is held. Once released it holds
    the release time and ``expires_at`` the time the note stops sounding.
    """
    note: MidiNote
    released_at: Optional[float] = None
    expires_at: Optional[float] = None

    @property
    def pitch(self) -> int:
        return self.note.pitch

    @property
    def is_held(self) -> bool:
        """Whether the key is still physically down."""
        return self.released_at is None


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_notes(notes: Iterable[MidiNote]) -> tuple[MidiNote, ...]:
    """Check a live note set before it is handed to the tracker.

    Args:
        notes: Notes reported by the input source

    Returns:
        The notes as a tuple, in the order received

    Raises:
        InvalidInput: On out-of-range values or a pitch reported twice
    """
    validated = tuple(notes)
    seen: set[int] = set()
    for note in validated:
        if not isinstance(note, MidiNote):
            raise InvalidInput(f"Expected MidiNote, got {note!r}")
        if not _is_int(note.pitch) or not 0 <= note.pitch <= MIDI_PITCH_MAX:
            raise InvalidInput(f"Pitch must be an integer in 0-{MIDI_PITCH_MAX}, got {note.pitch!r}")
        if not _is_int(note.velocity) or not 0 <= note.velocity <= VELOCITY_MAX:
            raise InvalidInput(f"Velocity must be an integer in 0-{VELOCITY_MAX}, got {note.velocity!r}")
        if note.pitch in seen:
            raise InvalidInput(f"Pitch {note.pitch} reported more than once")
        seen.add(note.pitch)
    return validated


def midi_to_note(pitch: int) -> tuple[str, int]:
    """Split a MIDI note number into pitch-class name and octave.

    Uses the convention C4 = 60.

    Args:
        pitch: MIDI note number (0-127)

    Returns:
        Tuple of (name, octave), e.g. ("C", 4) for 60
    """
    return NOTE_NAMES[pitch % 12], pitch // 12 - 1
