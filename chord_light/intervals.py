"""Interval naming.

Maps the distance in semitones between two notes to its music-theory name.
The table spans two octaves; wider intervals fold down by whole octaves
into the second octave, so 31 semitones reads as "Perfect 12th" and every
multiple of 12 from 24 up reads as "Double Octave".
"""

from .notes import InvalidInput

# Distance in semitones → interval name (index = semitones)
INTERVAL_NAMES: list[str] = [
    "Unison",          # 0
    "Minor 2nd",       # 1
    "Major 2nd",       # 2
    "Minor 3rd",       # 3
    "Major 3rd",       # 4
    "Perfect 4th",     # 5
    "Tritone",         # 6
    "Perfect 5th",     # 7
    "Minor 6th",       # 8
    "Major 6th",       # 9
    "Minor 7th",       # 10
    "Major 7th",       # 11
    "Octave",          # 12
    "Minor 9th",       # 13
    "Major 9th",       # 14
    "Minor 10th",      # 15
    "Major 10th",      # 16
    "Perfect 11th",    # 17
    "Augmented 11th",  # 18
    "Perfect 12th",    # 19
    "Minor 13th",      # 20
    "Major 13th",      # 21
    "Minor 14th",      # 22
    "Major 14th",      # 23
    "Double Octave",   # 24
]

# Interval name → distance in semitones
INTERVAL_SEMITONES: dict[str, int] = {
    name: semitones for semitones, name in enumerate(INTERVAL_NAMES)
}

MAX_NAMED_INTERVAL = len(INTERVAL_NAMES) - 1


def interval_name(semitones: int) -> str:
    """Name the interval spanning the given number of semitones.

    Args:
        semitones: Non-negative distance above the lower note

    Returns:
        Interval name, e.g. "Perfect 5th" for 7

    Raises:
        InvalidInput: If semitones is negative or not an integer
    """
    if not isinstance(semitones, int) or isinstance(semitones, bool):
        raise InvalidInput(f"Interval must be an integer, got {semitones!r}")
    if semitones < 0:
        raise InvalidInput(f"Interval must be non-negative, got {semitones}")

    while semitones > MAX_NAMED_INTERVAL:
        semitones -= 12
    return INTERVAL_NAMES[semitones]


def semitones_of(name: str) -> int:
    """Distance in semitones for an interval name from the table.

    Raises:
        InvalidInput: If the name is not a known interval
    """
    try:
        return INTERVAL_SEMITONES[name]
    except KeyError:
        raise InvalidInput(f"Unknown interval name: {name!r}") from None


def simple_interval(name: str) -> str:
    """Reduce a compound interval to its counterpart within one octave.

    "Major 10th" → "Major 3rd", "Octave" → "Unison".
    """
    return INTERVAL_NAMES[semitones_of(name) % 12]
