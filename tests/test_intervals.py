"""Unit tests for interval naming."""

import pytest

from chord_light.intervals import (
    INTERVAL_NAMES,
    interval_name,
    semitones_of,
    simple_interval,
)
from chord_light.notes import InvalidInput


class TestIntervalName:
    """Tests for interval_name."""

    def test_unison(self):
        assert interval_name(0) == "Unison"

    def test_perfect_fifth(self):
        assert interval_name(7) == "Perfect 5th"

    def test_octave(self):
        assert interval_name(12) == "Octave"

    def test_major_tenth(self):
        """E5 above C4 is a compound major third."""
        assert interval_name(16) == "Major 10th"

    def test_double_octave(self):
        assert interval_name(24) == "Double Octave"

    def test_table_covers_two_octaves(self):
        for semitones in range(25):
            assert interval_name(semitones) == INTERVAL_NAMES[semitones]

    def test_wider_intervals_fold_into_second_octave(self):
        """Beyond two octaves, names repeat from the second octave."""
        assert interval_name(31) == "Perfect 12th"
        assert interval_name(36) == "Double Octave"
        assert interval_name(28) == "Major 10th"
        assert interval_name(127) == interval_name(127 - 12 * 9)

    def test_same_distance_same_label(self):
        assert interval_name(9) == interval_name(9)

    def test_negative_rejected(self):
        with pytest.raises(InvalidInput):
            interval_name(-1)

    @pytest.mark.parametrize("value", [3.0, "7", None, True])
    def test_non_integer_rejected(self, value):
        with pytest.raises(InvalidInput):
            interval_name(value)


class TestSimpleInterval:
    """Tests for compound → simple interval reduction."""

    def test_simple_stays_simple(self):
        assert simple_interval("Minor 3rd") == "Minor 3rd"

    def test_compound_reduced(self):
        assert simple_interval("Major 10th") == "Major 3rd"
        assert simple_interval("Minor 9th") == "Minor 2nd"
        assert simple_interval("Perfect 12th") == "Perfect 5th"

    def test_octaves_reduce_to_unison(self):
        assert simple_interval("Octave") == "Unison"
        assert simple_interval("Double Octave") == "Unison"

    def test_semitones_of(self):
        assert semitones_of("Tritone") == 6
        assert semitones_of("Major 14th") == 23

    def test_unknown_name_rejected(self):
        with pytest.raises(InvalidInput):
            simple_interval("Neutral 3rd")
