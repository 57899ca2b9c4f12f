"""MIDI input handling using mido and python-rtmidi.

Listens to one channel of the connected controller(s) and keeps the set
of keys currently held down, which the app polls on every decay tick.
"""

from typing import Optional

import mido

from . import config
from .notes import MidiNote


class MidiHandler:
    """Handles MIDI input from the controller.

    Opens MIDI input ports and turns the incoming Note-On/Off stream into
    a poll-style "which keys are down right now" view.
    """

    def __init__(
        self,
        port_pattern: Optional[str] = config.MIDI_PORT_PATTERN,
        channel: int = config.MIDI_CHANNEL,
        debug: bool = False,
    ):
        """Initialize the MIDI handler.

        Args:
            port_pattern: Substring to match in port names, or None for all ports
            channel: MIDI channel to listen on (0-15)
            debug: If True, print raw MIDI messages to console
        """
        self.port_pattern = port_pattern
        self.channel = channel
        self.debug = debug
        self._ports: list[mido.ports.BaseInput] = []
        self._port_names: list[str] = []
        # Held keys: MIDI note → MidiNote
        self._held: dict[int, MidiNote] = {}

    def open(self) -> str:
        """Open the matching MIDI input ports.

        Falls back to a virtual input port when no hardware port can be
        opened, so another application can route notes to us.

        Returns:
            Comma-separated list of opened port names

        Raises:
            RuntimeError: If no port, physical or virtual, could be opened
        """
        self._ports = []
        self._port_names = []

        for name in mido.get_input_names():
            if self.port_pattern and self.port_pattern.lower() not in name.lower():
                continue
            lower_name = name.lower()
            if "midi through" in lower_name or "rtmidi" in lower_name:
                continue

            try:
                self._ports.append(mido.open_input(name))
                self._port_names.append(name)
            except Exception as e:
                print(f"[MIDI] Warning: could not open '{name}': {e}")

        if not self._ports:
            if self.port_pattern:
                print(f"[MIDI] Warning: no ports matching '{self.port_pattern}' could be opened.")
            print(f"[MIDI] Creating virtual input port '{config.VIRTUAL_PORT_NAME}'...")
            try:
                self._ports.append(mido.open_input(config.VIRTUAL_PORT_NAME, virtual=True))
                self._port_names.append(f"{config.VIRTUAL_PORT_NAME} (Virtual)")
            except Exception as e:
                raise RuntimeError(
                    f"Could not open any MIDI ports (Physical or Virtual). Error: {e}"
                ) from e

        return ", ".join(self._port_names)

    def close(self) -> None:
        """Close all MIDI input ports and forget held keys."""
        for port in self._ports:
            port.close()
        self._ports = []
        self._port_names = []
        self._held.clear()

    def poll(self) -> list[mido.Message]:
        """Poll for pending MIDI messages from all ports (non-blocking).

        Returns:
            List of pending MIDI messages
        """
        messages = []
        for port in self._ports:
            messages.extend(port.iter_pending())

        if self.debug:
            for msg in messages:
                print(f"[MIDI IN] {msg}")

        return messages

    def handle_message(self, msg: mido.Message) -> bool:
        """Update held keys from one message.

        Messages on other channels and non-note messages are ignored,
        except All Notes Off / All Sound Off which release every key.

        Returns:
            True if the held key set changed
        """
        if getattr(msg, "channel", None) != self.channel:
            return False

        if self.is_note_on(msg):
            note = MidiNote(pitch=msg.note, velocity=msg.velocity)
            changed = self._held.get(msg.note) != note
            self._held[msg.note] = note
            return changed

        if self.is_note_off(msg):
            return self._held.pop(msg.note, None) is not None

        if self.is_all_notes_off(msg):
            changed = bool(self._held)
            self._held.clear()
            return changed

        return False

    def held_notes(self) -> list[MidiNote]:
        """Drain pending messages and return the keys held right now.

        This is the note source polled by the app on every decay tick.
        """
        for msg in self.poll():
            self.handle_message(msg)
        return list(self._held.values())

    def is_note_on(self, msg: mido.Message) -> bool:
        """Check if a message is a Note-On event.

        Note: A Note-On with velocity 0 is treated as Note-Off.
        """
        return msg.type == "note_on" and msg.velocity > 0

    def is_note_off(self, msg: mido.Message) -> bool:
        """Check if a message is a Note-Off event.

        Note: A Note-On with velocity 0 is treated as Note-Off.
        """
        return msg.type == "note_off" or (
            msg.type == "note_on" and msg.velocity == 0
        )

    def is_all_notes_off(self, msg: mido.Message) -> bool:
        """Check if a message is All Notes Off (CC123) or All Sound Off (CC120)."""
        return msg.type == "control_change" and msg.control in (
            config.ALL_NOTES_OFF_CC,
            config.ALL_SOUND_OFF_CC,
        )

    @property
    def port_name(self) -> Optional[str]:
        """Names of currently open ports (comma separated)."""
        if not self._port_names:
            return None
        return ", ".join(self._port_names)

    @property
    def is_open(self) -> bool:
        """Whether any port is currently open."""
        return len(self._ports) > 0

    @staticmethod
    def list_ports() -> list[str]:
        """List all available MIDI input ports."""
        return mido.get_input_names()

    def __enter__(self) -> "MidiHandler":
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
