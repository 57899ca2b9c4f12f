"""Main entry point for Chord Light.

Turns live MIDI into a light color and intensity in a real-time loop:

- every 40ms the held keys are folded into the tracked note set, reduced to
  bass + intervals and mapped to a color;
- every 25ms the light intensity decays toward its floor.
"""

import argparse
import signal
import time
from typing import Callable, Iterable, Optional

from . import config
from .colors import identify_chord
from .harmony import reduce_harmony
from .intensity import IntensityController
from .midi_handler import MidiHandler
from .note_tracker import NoteTracker
from .notes import MidiNote, validate_notes
from .osc_sender import MockOscSender, OscSender
from .state import LightState
from .ticker import PeriodicTask

NoteSource = Callable[[], Iterable[MidiNote]]


class ChordLight:
    """Main application class for Chord Light.

    Coordinates MIDI input, note tracking, harmony and color mapping,
    the intensity envelope and OSC output. Both periodic tasks run on the
    calling thread, one tick at a time, so the tracked notes and the
    intensity each have a single writer.
    """

    def __init__(
        self,
        note_source: Optional[NoteSource] = None,
        osc: Optional[OscSender] = None,
        mock_osc: bool = False,
        verbose: bool = True,
        port_pattern: Optional[str] = config.MIDI_PORT_PATTERN,
        channel: int = config.MIDI_CHANNEL,
        debug: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize Chord Light.

        Args:
            note_source: Callable returning the keys held right now. If None,
                a MidiHandler is created and polled.
            osc: Output sender. If None, one is created from mock_osc.
            mock_osc: If True, use MockOscSender instead of real OSC
            verbose: If True, print status messages
            port_pattern: MIDI port name filter (MidiHandler only)
            channel: MIDI channel to listen on (MidiHandler only)
            debug: If True, print raw MIDI messages (MidiHandler only)
            clock: Monotonic time source in seconds
        """
        self.verbose = verbose
        self.running = False
        self.clock = clock

        self.midi: Optional[MidiHandler] = None
        if note_source is None:
            self.midi = MidiHandler(port_pattern=port_pattern, channel=channel, debug=debug)
            note_source = self.midi.held_notes
        self.note_source = note_source

        if osc is None:
            osc = MockOscSender(verbose=verbose) if mock_osc else OscSender()
        self.osc = osc

        self.tracker = NoteTracker()
        self.intensity = IntensityController()
        self.state = LightState()

        self._decay_task = PeriodicTask(config.DECAY_TICK_INTERVAL, self.decay_tick, "decay")
        self._intensity_task = PeriodicTask(config.INTENSITY_TICK_INTERVAL, self.intensity_tick, "intensity")

    def start(self) -> None:
        """Open input/output and start both periodic tasks from a clean state."""
        if self.midi is not None:
            port_name = self.midi.open()
            if self.verbose:
                print(f"✓ MIDI: Connected to '{port_name}' (channel {self.midi.channel + 1})")

        self.osc.open()
        if self.verbose:
            print(f"✓ OSC: Targeting {self.osc.host}:{self.osc.port}")

        self._reset()
        self.osc.send_state(self.state)

        now = self.clock()
        self._decay_task.start(now)
        self._intensity_task.start(now)
        self.running = True

        if self.verbose:
            print("\n💡 Chord Light is active! Press Ctrl+C to stop.\n")

    def stop(self) -> None:
        """Stop both tasks, drop all notes and return the light to rest."""
        self.running = False
        self._decay_task.stop()
        self._intensity_task.stop()

        self._reset()
        self.osc.send_state(self.state)

        if self.midi is not None:
            self.midi.close()
        self.osc.close()

        if self.verbose:
            print("\n✓ Chord Light has stopped.")

    def _reset(self) -> None:
        self.tracker.clear()
        self.intensity.reset()
        self.state.reset()

    def decay_tick(self, now: float) -> None:
        """Advance the tracked notes and recompute harmony and color.

        Args:
            now: Current time in seconds

        Raises:
            InvalidInput: If the note source reports malformed notes
        """
        live = validate_notes(self.note_source())

        previous = self.tracker.tracked
        current = self.tracker.update(live, now)
        self.intensity.observe(previous, current)
        self.state.update_intensity(self.intensity.value, self.intensity.accent)

        bass, intervals = reduce_harmony(current)
        match = identify_chord(bass, intervals)
        changed = self.state.update_harmony(bass, intervals, match)

        if changed:
            self.osc.send_color(self.state.color)
            self.osc.send_harmony(self.state.bass_label, self.state.chord, self.state.intervals)
            if self.verbose:
                self._print_harmony()

    def intensity_tick(self, now: float) -> None:
        """Decay the light intensity one step and publish it."""
        self.intensity.tick()
        self.state.update_intensity(self.intensity.value, self.intensity.accent)
        self.osc.send_intensity(self.state.intensity, self.state.accent_intensity)

    def poll(self, now: Optional[float] = None) -> None:
        """Run whichever periodic tasks are due.

        The decay task runs first so a tick boundary shared by both tasks
        sees the freshest tracked set.
        """
        if now is None:
            now = self.clock()
        self._decay_task.poll(now)
        self._intensity_task.poll(now)

    def _print_harmony(self) -> None:
        state = self.state
        if state.bass is None:
            print("♫ (silence)")
            return
        intervals = ", ".join(state.intervals) or "-"
        chord = state.chord or "(unrecognised)"
        print(f"♪ Bass {state.bass_label}: {intervals} → {chord} {state.color.css()}")

    def run(self) -> None:
        """Run the main event loop."""
        self.start()

        try:
            while self.running:
                self.poll()
                # Sleep to avoid busy-waiting
                time.sleep(config.LOOP_INTERVAL)

        except KeyboardInterrupt:
            pass
        finally:
            self.stop()


def main() -> None:
    """Entry point for the Chord Light CLI."""
    parser = argparse.ArgumentParser(
        description="Chord Light - turns the harmony you play into light"
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use mock OSC sender (print instead of sending to a renderer)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce output verbosity",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print raw incoming MIDI messages",
    )
    parser.add_argument(
        "--list-ports",
        action="store_true",
        help="List available MIDI input ports and exit",
    )
    parser.add_argument(
        "--port-pattern",
        default=config.MIDI_PORT_PATTERN,
        help="Only open MIDI ports whose name contains this text",
    )
    parser.add_argument(
        "--channel",
        type=int,
        choices=range(1, 17),
        default=config.MIDI_CHANNEL + 1,
        metavar="1-16",
        help=f"MIDI channel to listen on (default: {config.MIDI_CHANNEL + 1})",
    )
    parser.add_argument(
        "--osc-host",
        default=config.OSC_HOST,
        help=f"Renderer host (default: {config.OSC_HOST})",
    )
    parser.add_argument(
        "--osc-port",
        type=int,
        default=config.OSC_PORT,
        help=f"Renderer OSC port (default: {config.OSC_PORT})",
    )

    args = parser.parse_args()

    # List ports mode
    if args.list_ports:
        ports = MidiHandler.list_ports()
        print("Available MIDI input ports:")
        for i, port in enumerate(ports):
            print(f"  [{i}] {port}")
        if not ports:
            print("  (none)")
        return

    verbose = not args.quiet
    if args.mock:
        osc: OscSender = MockOscSender(args.osc_host, args.osc_port, verbose=verbose)
    else:
        osc = OscSender(args.osc_host, args.osc_port)

    app = ChordLight(
        osc=osc,
        verbose=verbose,
        port_pattern=args.port_pattern,
        channel=args.channel - 1,
        debug=args.debug,
    )

    # Handle signals gracefully
    def signal_handler(sig, frame):
        app.running = False

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    app.run()


if __name__ == "__main__":
    main()
