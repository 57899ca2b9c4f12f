"""Configuration constants for Chord Light."""

# =============================================================================
# Note Decay
# =============================================================================

# How long a released note keeps sounding, in seconds.
# The actual window is scaled by velocity: (velocity / 256 + 0.5) * timeout,
# so a soft note rings for half of this and a full-velocity note for ~1.5x.
MAX_NOTE_TIMEOUT = 0.4

# How often the tracked note set is recomputed (seconds)
DECAY_TICK_INTERVAL = 0.040

# =============================================================================
# Lighting
# =============================================================================

# Resting light intensity (floor). Intensity never drops below this.
DEFAULT_INTENSITY = 10.0

# Amount subtracted from intensity on every intensity tick
LIGHT_DECAY_PACE = 2.0

# How often the intensity decays (seconds)
INTENSITY_TICK_INTERVAL = 0.025

# The accent light runs brighter than the main light by this ratio
ACCENT_INTENSITY_RATIO = 1.5

# Whether re-striking a note that is still ringing out flashes the light again.
# OFF = only pitches that were not tracked at all raise the intensity
RETRIGGER_ON_REVIVE = False

# =============================================================================
# Color Mapping
# =============================================================================

# Color shown when nothing is playing or the harmony is not recognised
# (hue in degrees, saturation and lightness in percent)
DEFAULT_COLOR_HSL = (0.0, 0.0, 0.0)

# Hue rotation per semitone of the chord root (12 * 30 = full circle)
HUE_STEP = 30.0

# Chord qualities recognised by the color mapper.
# Each row: (intervals above bass, name, base hue, saturation, lightness, root offset)
#
# Intervals are simple (within one octave); compound intervals and octave
# doublings are folded before lookup. The root offset is the distance in
# semitones from the bass up to the chord root, so inversions share the hue
# of their root-position chord.
CHORD_QUALITIES = [
    # Single notes and dyads
    ((), "Note", 0.0, 30.0, 50.0, 0),
    (("Perfect 5th",), "Power Chord", 0.0, 70.0, 50.0, 0),
    (("Perfect 4th",), "Power Chord", 0.0, 70.0, 50.0, 5),
    (("Major 3rd",), "Major Third", 0.0, 80.0, 60.0, 0),
    (("Minor 3rd",), "Minor Third", 180.0, 70.0, 45.0, 0),

    # Triads (root position, 1st inversion, 2nd inversion)
    (("Major 3rd", "Perfect 5th"), "Major", 0.0, 85.0, 55.0, 0),
    (("Minor 3rd", "Minor 6th"), "Major", 0.0, 85.0, 55.0, 8),
    (("Perfect 4th", "Major 6th"), "Major", 0.0, 85.0, 55.0, 5),
    (("Minor 3rd", "Perfect 5th"), "Minor", 180.0, 70.0, 40.0, 0),
    (("Major 3rd", "Major 6th"), "Minor", 180.0, 70.0, 40.0, 9),
    (("Perfect 4th", "Minor 6th"), "Minor", 180.0, 70.0, 40.0, 5),
    (("Minor 3rd", "Tritone"), "Diminished", 270.0, 50.0, 35.0, 0),
    (("Major 3rd", "Minor 6th"), "Augmented", 90.0, 90.0, 60.0, 0),
    (("Major 2nd", "Perfect 5th"), "Sus2", 45.0, 60.0, 55.0, 0),
    (("Perfect 4th", "Perfect 5th"), "Sus4", 135.0, 60.0, 55.0, 0),

    # Sixths and sevenths
    (("Major 3rd", "Perfect 5th", "Major 6th"), "Major 6th", 345.0, 75.0, 60.0, 0),
    (("Minor 3rd", "Perfect 5th", "Major 6th"), "Minor 6th", 165.0, 60.0, 45.0, 0),
    (("Major 3rd", "Perfect 5th", "Major 7th"), "Major 7th", 30.0, 80.0, 60.0, 0),
    (("Major 3rd", "Perfect 5th", "Minor 7th"), "Dominant 7th", 15.0, 90.0, 50.0, 0),
    (("Major 3rd", "Minor 7th"), "Dominant 7th", 15.0, 90.0, 50.0, 0),
    (("Minor 3rd", "Perfect 5th", "Minor 7th"), "Minor 7th", 210.0, 65.0, 45.0, 0),
    (("Minor 3rd", "Perfect 5th", "Major 7th"), "Minor-Major 7th", 195.0, 70.0, 45.0, 0),
    (("Minor 3rd", "Tritone", "Minor 7th"), "Half-Diminished 7th", 285.0, 55.0, 40.0, 0),
    (("Minor 3rd", "Tritone", "Major 6th"), "Diminished 7th", 300.0, 45.0, 35.0, 0),

    # Added tones and ninths
    (("Major 2nd", "Major 3rd", "Perfect 5th"), "Add 9", 60.0, 75.0, 60.0, 0),
    (("Major 2nd", "Major 3rd", "Perfect 5th", "Minor 7th"), "Dominant 9th", 20.0, 90.0, 55.0, 0),
    (("Major 2nd", "Major 3rd", "Perfect 5th", "Major 7th"), "Major 9th", 40.0, 80.0, 65.0, 0),
    (("Major 2nd", "Minor 3rd", "Perfect 5th", "Minor 7th"), "Minor 9th", 225.0, 65.0, 50.0, 0),
]

# =============================================================================
# MIDI Configuration
# =============================================================================

# Pattern to match MIDI input port name (case-insensitive substring match)
# Set to None to open every available port
MIDI_PORT_PATTERN = None

# Channel to listen on (mido channels are 0-based, 0 = MIDI channel 1)
MIDI_CHANNEL = 0

# Name of the virtual port created when no hardware port can be opened
VIRTUAL_PORT_NAME = "ChordLight Input"

# Channel mode messages that release every held note
ALL_SOUND_OFF_CC = 120
ALL_NOTES_OFF_CC = 123

# =============================================================================
# OSC Configuration (renderer)
# =============================================================================

OSC_HOST = "127.0.0.1"
OSC_PORT = 9001

OSC_COLOR = "/chordlight/color"
OSC_HARMONY = "/chordlight/harmony"
OSC_INTENSITY = "/chordlight/intensity"

# =============================================================================
# Performance
# =============================================================================

# Main loop sleep between scheduler polls (seconds)
LOOP_INTERVAL = 0.001
