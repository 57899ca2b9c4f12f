"""Harmony-to-color mapping.

Looks up the set of intervals above the bass in a table of chord
qualities. Each quality has a base hue; the hue is then rotated by the
pitch class of the chord root, so the same chord transposed up a semitone
shifts by ``config.HUE_STEP`` degrees and octave transpositions keep the
same color.
"""

import colorsys
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from . import config
from .intervals import INTERVAL_SEMITONES, simple_interval
from .notes import NOTE_NAMES


@dataclass(frozen=True)
class Color:
    """An HSL color: hue in degrees, saturation and lightness in percent."""
    hue: float
    saturation: float
    lightness: float

    def to_rgb(self) -> tuple[int, int, int]:
        """Convert to 8-bit RGB."""
        r, g, b = colorsys.hls_to_rgb(
            (self.hue % 360.0) / 360.0,
            self.lightness / 100.0,
            self.saturation / 100.0,
        )
        return round(r * 255), round(g * 255), round(b * 255)

    def css(self) -> str:
        """CSS-style representation, e.g. ``hsl(0, 85%, 55%)``."""
        return f"hsl({self.hue:g}, {self.saturation:g}%, {self.lightness:g}%)"


DEFAULT_COLOR = Color(*config.DEFAULT_COLOR_HSL)


@dataclass(frozen=True)
class ChordQuality:
    """A row of the chord quality table."""
    name: str
    base_hue: float
    saturation: float
    lightness: float
    root_offset: int = 0


@dataclass(frozen=True)
class ChordMatch:
    """A recognised harmony: its quality and root pitch class (0-11)."""
    quality: ChordQuality
    root: int

    @property
    def name(self) -> str:
        return f"{NOTE_NAMES[self.root]} {self.quality.name}"

    @property
    def color(self) -> Color:
        hue = (self.quality.base_hue + self.root * config.HUE_STEP) % 360.0
        return Color(hue, self.quality.saturation, self.quality.lightness)


def build_quality_table(rows: Iterable[tuple]) -> dict[frozenset[str], ChordQuality]:
    """Build the lookup table from config rows.

    Args:
        rows: (intervals, name, base hue, saturation, lightness, root offset)

    Returns:
        Dictionary mapping interval set → ChordQuality

    Raises:
        ValueError: If a row uses an unknown or compound interval, or two
            rows share the same interval set
    """
    table: dict[frozenset[str], ChordQuality] = {}
    for intervals, name, base_hue, saturation, lightness, root_offset in rows:
        for label in intervals:
            if INTERVAL_SEMITONES.get(label, 12) >= 12 or label == "Unison":
                raise ValueError(f"Chord '{name}' uses non-simple interval {label!r}")
        key = frozenset(intervals)
        if key in table:
            raise ValueError(
                f"Chord '{name}' duplicates the intervals of '{table[key].name}'"
            )
        table[key] = ChordQuality(name, base_hue, saturation, lightness, root_offset)
    return table


QUALITY_TABLE = build_quality_table(config.CHORD_QUALITIES)


def harmonic_key(intervals: Iterable[str]) -> Optional[frozenset[str]]:
    """Fold interval labels into the set used for table lookup.

    Compound intervals become simple ones and octave doublings drop out.
    Returns None if any label is not a known interval name.
    """
    key = set()
    for label in intervals:
        if label not in INTERVAL_SEMITONES:
            return None
        simple = simple_interval(label)
        if simple != "Unison":
            key.add(simple)
    return frozenset(key)


def identify_chord(
    bass: Optional[int],
    intervals: Sequence[str],
    table: Optional[dict[frozenset[str], ChordQuality]] = None,
) -> Optional[ChordMatch]:
    """Recognise the chord quality of a bass note plus intervals.

    Args:
        bass: MIDI note number of the bass, or None when nothing sounds
        intervals: Interval labels above the bass
        table: Quality table (defaults to QUALITY_TABLE)

    Returns:
        ChordMatch, or None if nothing sounds or the harmony is unknown
    """
    if bass is None:
        return None
    if table is None:
        table = QUALITY_TABLE

    key = harmonic_key(intervals)
    if key is None:
        return None
    quality = table.get(key)
    if quality is None:
        return None
    return ChordMatch(quality=quality, root=(bass + quality.root_offset) % 12)


def color_for(
    bass: Optional[int],
    intervals: Sequence[str],
    table: Optional[dict[frozenset[str], ChordQuality]] = None,
) -> Optional[Color]:
    """Color for a harmony, or None if it is silent or unrecognised."""
    match = identify_chord(bass, intervals, table)
    if match is None:
        return None
    return match.color
