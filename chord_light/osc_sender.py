"""OSC output to the renderer.

Publishes the light state so any OSC-capable renderer can draw it:

- /chordlight/color     hue saturation lightness r g b
- /chordlight/harmony   bass chord interval...   (empty strings when silent)
- /chordlight/intensity intensity accent
"""

from typing import Optional

from pythonosc import udp_client

from . import config
from .colors import Color
from .state import LightState


class OscSender:
    """Sends light state to the renderer over OSC (UDP)."""

    def __init__(
        self,
        host: str = config.OSC_HOST,
        port: int = config.OSC_PORT,
    ):
        """Initialize the OSC sender.

        Args:
            host: Target host address
            port: Target UDP port of the renderer
        """
        self.host = host
        self.port = port
        self._client: Optional[udp_client.SimpleUDPClient] = None

    def open(self) -> None:
        """Open the OSC connection."""
        self._client = udp_client.SimpleUDPClient(self.host, self.port)

    def close(self) -> None:
        """Close the OSC connection."""
        self._client = None

    def send_raw(self, address: str, *args) -> None:
        """Send an arbitrary OSC message. No-op while closed."""
        if self._client is None:
            return
        self._client.send_message(address, list(args))

    def send_color(self, color: Color) -> None:
        """Send the target color as HSL plus 8-bit RGB."""
        r, g, b = color.to_rgb()
        self.send_raw(
            config.OSC_COLOR,
            float(color.hue), float(color.saturation), float(color.lightness),
            r, g, b,
        )

    def send_harmony(
        self,
        bass: Optional[str],
        chord: Optional[str],
        intervals: tuple[str, ...],
    ) -> None:
        """Send the bass label, chord name and interval labels."""
        self.send_raw(config.OSC_HARMONY, bass or "", chord or "", *intervals)

    def send_intensity(self, intensity: float, accent: float) -> None:
        """Send the main and accent light intensities."""
        self.send_raw(config.OSC_INTENSITY, float(intensity), float(accent))

    def send_state(self, state: LightState) -> None:
        """Send a complete snapshot."""
        self.send_color(state.color)
        self.send_harmony(state.bass_label, state.chord, state.intervals)
        self.send_intensity(state.intensity, state.accent_intensity)

    @property
    def is_open(self) -> bool:
        """Whether the connection is open."""
        return self._client is not None

    def __enter__(self) -> "OscSender":
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


class MockOscSender(OscSender):
    """Records messages instead of sending them.

    Useful for running without a renderer and for tests.
    """

    def __init__(self, *args, verbose: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.verbose = verbose
        self._log: list[dict] = []
        self._open = False

    def open(self) -> None:
        """Mark as open."""
        self._open = True
        if self.verbose:
            print("[MockOSC] Opened (no real connection)")

    def close(self) -> None:
        """Mark as closed."""
        self._open = False
        if self.verbose:
            print("[MockOSC] Closed")

    def send_raw(self, address: str, *args) -> None:
        """Record the message."""
        if not self._open:
            return
        self._log.append({"address": address, "args": list(args)})
        # Intensity changes every 25ms; printing it would flood the console
        if self.verbose and address != config.OSC_INTENSITY:
            print(f"[MockOSC] {address} {list(args)}")

    def get_log(self) -> list[dict]:
        """Get all recorded messages."""
        return self._log.copy()

    def clear_log(self) -> None:
        """Clear the message log."""
        self._log.clear()

    @property
    def is_open(self) -> bool:
        return self._open
