"""Tests for note tracking with release grace period.

All times are in seconds. With MAX_NOTE_TIMEOUT = 0.4:

    velocity | window
    ---------|--------
    0        | 0.200
    64       | 0.300
    128      | 0.400
    255      | ~0.598
"""

import pytest

from chord_light.note_tracker import (
    NoteTracker,
    advance,
    decay_deadline,
    newly_struck,
    revived,
)
from chord_light.notes import MidiNote, TrackedNote

TIMEOUT = 0.4


def held(pitch, velocity=100):
    return TrackedNote(MidiNote(pitch, velocity))


class TestDecayDeadline:

    def test_velocity_zero_is_half_timeout(self):
        assert decay_deadline(0, TIMEOUT) == pytest.approx(0.2)

    def test_velocity_64(self):
        assert decay_deadline(64, TIMEOUT) == pytest.approx(0.3)

    def test_velocity_128(self):
        assert decay_deadline(128, TIMEOUT) == pytest.approx(0.4)

    def test_louder_rings_longer(self):
        assert decay_deadline(120, TIMEOUT) > decay_deadline(30, TIMEOUT)


class TestAdvance:
    """Tests for the pure advance function."""

    def test_live_notes_are_held(self):
        result = advance([MidiNote(64, 90), MidiNote(60, 80)], (), now=0.0)
        assert [entry.pitch for entry in result] == [60, 64]
        assert all(entry.is_held for entry in result)

    def test_release_starts_grace_period(self):
        result = advance([], (held(60, 64),), now=1.0, max_timeout=TIMEOUT)
        assert len(result) == 1
        assert result[0].released_at == 1.0
        assert result[0].expires_at == pytest.approx(1.3)

    def test_velocity_64_rings_until_deadline(self):
        """Released at t=0, still there just before 0.3s, gone after."""
        notes = advance([], (held(60, 64),), now=0.0, max_timeout=TIMEOUT)
        assert [e.pitch for e in advance([], notes, 0.28, TIMEOUT)] == [60]
        assert advance([], notes, 0.32, TIMEOUT) == ()

    def test_velocity_128_rings_400ms(self):
        notes = advance([], (held(60, 128),), now=0.0, max_timeout=TIMEOUT)
        assert len(advance([], notes, 0.38, TIMEOUT)) == 1
        assert advance([], notes, 0.42, TIMEOUT) == ()

    def test_velocity_zero_minimum_window(self):
        notes = advance([], (held(60, 0),), now=0.0, max_timeout=TIMEOUT)
        assert len(advance([], notes, 0.18, TIMEOUT)) == 1
        assert advance([], notes, 0.22, TIMEOUT) == ()

    def test_dropped_exactly_at_deadline(self):
        entry = TrackedNote(MidiNote(60, 64), released_at=0.0, expires_at=0.5)
        assert advance([], (entry,), 0.5, TIMEOUT) == ()

    def test_release_time_not_reset_on_later_ticks(self):
        notes = advance([], (held(60, 64),), now=0.0, max_timeout=TIMEOUT)
        later = advance([], notes, 0.1, TIMEOUT)
        assert later[0].released_at == 0.0

    def test_restrike_revives_note(self):
        notes = advance([], (held(60, 64),), now=0.0, max_timeout=TIMEOUT)
        revived_notes = advance([MidiNote(60, 90)], notes, 0.2, TIMEOUT)
        assert len(revived_notes) == 1
        assert revived_notes[0].is_held
        assert revived_notes[0].note.velocity == 90

    def test_restruck_note_not_dropped_early(self):
        """A note re-struck before its deadline stays while held."""
        notes = advance([], (held(60, 64),), now=0.0, max_timeout=TIMEOUT)
        notes = advance([MidiNote(60, 64)], notes, 0.2, TIMEOUT)
        notes = advance([MidiNote(60, 64)], notes, 5.0, TIMEOUT)
        assert [e.pitch for e in notes] == [60]
        assert notes[0].is_held

    def test_no_duplicates(self):
        previous = (
            held(60),
            TrackedNote(MidiNote(64, 100), released_at=0.0, expires_at=1.0),
        )
        result = advance([MidiNote(60, 100), MidiNote(64, 100)], previous, 0.1)
        pitches = [entry.pitch for entry in result]
        assert sorted(pitches) == [60, 64]
        assert len(set(pitches)) == len(pitches)

    def test_held_and_releasing_invariant(self):
        """Held entries are live; releasing entries are not."""
        live = [MidiNote(60, 100)]
        previous = (held(60), held(64), held(67))
        result = advance(live, previous, 0.0)
        live_pitches = {note.pitch for note in live}
        for entry in result:
            assert entry.is_held == (entry.pitch in live_pitches)

    def test_releasing_notes_keep_previous_order(self):
        previous = (held(67), held(60), held(64))
        result = advance([MidiNote(64, 100)], previous, 0.0)
        assert [entry.pitch for entry in result] == [64, 67, 60]

    def test_previous_not_mutated(self):
        previous = (held(60),)
        advance([], previous, 0.0)
        assert previous[0].is_held


class TestTransitions:
    """Tests for newly_struck and revived."""

    def test_new_pitch_is_struck(self):
        current = advance([MidiNote(60, 100)], (), 0.0)
        assert newly_struck((), current) == [MidiNote(60, 100)]

    def test_still_held_is_not_struck(self):
        previous = (held(60),)
        current = advance([MidiNote(60, 100)], previous, 0.04)
        assert newly_struck(previous, current) == []

    def test_release_is_not_struck(self):
        previous = (held(60),)
        current = advance([], previous, 0.04)
        assert newly_struck(previous, current) == []

    def test_restrike_while_ringing_is_revived_not_struck(self):
        previous = (TrackedNote(MidiNote(60, 100), released_at=0.0, expires_at=1.0),)
        current = advance([MidiNote(60, 80)], previous, 0.1)
        assert newly_struck(previous, current) == []
        assert revived(previous, current) == [MidiNote(60, 80)]


class TestNoteTracker:
    """Tests for the stateful tracker."""

    @pytest.fixture
    def tracker(self):
        return NoteTracker(max_timeout=TIMEOUT)

    def test_starts_empty(self, tracker):
        assert tracker.is_empty
        assert len(tracker) == 0

    def test_update_replaces_set(self, tracker):
        first = tracker.update([MidiNote(60, 100)], 0.0)
        second = tracker.update([MidiNote(60, 100), MidiNote(64, 100)], 0.04)
        assert first is not second
        assert tracker.tracked == second
        assert tracker.pitches == [60, 64]

    def test_full_lifecycle(self, tracker):
        tracker.update([MidiNote(60, 64)], 0.0)
        tracker.update([], 0.04)
        assert tracker.pitches == [60]
        tracker.update([], 0.30)
        assert tracker.pitches == [60]
        tracker.update([], 0.36)
        assert tracker.is_empty

    def test_clear(self, tracker):
        tracker.update([MidiNote(60, 100), MidiNote(67, 100)], 0.0)
        dropped = tracker.clear()
        assert [entry.pitch for entry in dropped] == [60, 67]
        assert tracker.is_empty
