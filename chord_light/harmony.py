"""Reduce a tracked note set to its bass note and intervals."""

from typing import Iterable, Optional

from .intervals import interval_name
from .notes import TrackedNote, midi_to_note


def reduce_harmony(tracked: Iterable[TrackedNote]) -> tuple[Optional[int], tuple[str, ...]]:
    """Find the bass and name every other note relative to it.

    Pitches are compared as absolute MIDI numbers, so the bass is the
    lowest sounding note, not the lowest pitch class. Every note above
    the bass yields one label, in ascending order; repeated labels are
    kept.

    Args:
        tracked: Currently tracked notes

    Returns:
        Tuple of (bass pitch or None, interval labels)
    """
    pitches = sorted(entry.pitch for entry in tracked)
    if not pitches:
        return None, ()

    bass = pitches[0]
    return bass, tuple(interval_name(pitch - bass) for pitch in pitches[1:])


def bass_label(bass: Optional[int]) -> Optional[str]:
    """Pitch-class name of the bass note ("C", "F#", ...), or None."""
    if bass is None:
        return None
    return midi_to_note(bass)[0]
