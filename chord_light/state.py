"""Light state exposed to the renderer.

Always holds instantaneous target values. Any smoothing toward them is
left to whatever draws the scene.
"""

from dataclasses import dataclass
from typing import Optional

from . import config
from .colors import DEFAULT_COLOR, ChordMatch, Color
from .harmony import bass_label


@dataclass
class LightState:
    """Snapshot of what the lights should show."""

    # Harmony (updated every decay tick)
    color: Color = DEFAULT_COLOR
    bass: Optional[int] = None
    intervals: tuple[str, ...] = ()
    chord: Optional[str] = None

    # Lighting (updated every intensity tick)
    intensity: float = config.DEFAULT_INTENSITY
    accent_intensity: float = config.DEFAULT_INTENSITY * config.ACCENT_INTENSITY_RATIO

    def update_harmony(
        self,
        bass: Optional[int],
        intervals: tuple[str, ...],
        match: Optional[ChordMatch],
    ) -> bool:
        """Store a new harmony.

        Unrecognised harmonies fall back to the default color.

        Returns:
            True if the bass or intervals changed
        """
        changed = bass != self.bass or intervals != self.intervals
        self.bass = bass
        self.intervals = intervals
        if match is None:
            self.color = DEFAULT_COLOR
            self.chord = None
        else:
            self.color = match.color
            self.chord = match.name
        return changed

    def update_intensity(self, intensity: float, accent: float) -> None:
        """Store the current light intensities."""
        self.intensity = intensity
        self.accent_intensity = accent

    def reset(self) -> None:
        """Back to silence: default color and resting intensity."""
        self.update_harmony(None, (), None)
        self.update_intensity(
            config.DEFAULT_INTENSITY,
            config.DEFAULT_INTENSITY * config.ACCENT_INTENSITY_RATIO,
        )

    @property
    def bass_label(self) -> Optional[str]:
        return bass_label(self.bass)
