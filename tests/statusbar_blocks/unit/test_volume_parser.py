"""Unit tests for amixer status line parsing."""

import pytest

from statusbar_blocks.errors import ParseErrorKind, StatusParseError
from statusbar_blocks.volume import VolumeState, parse_status_line


class TestParseUnmuted:
    """Lines whose bracketed segment contains "on"."""

    def test_mono_line(self):
        """Test the usual amixer mono line."""
        state = parse_status_line("Mono: Playback 50 [75%] [on]")
        assert state == VolumeState(current_volume=75, muted=False)

    @pytest.mark.parametrize("percent", [1, 9, 33, 67, 100])
    def test_digits_become_volume(self, percent):
        """Test digits after the first bracket are read as the percentage."""
        state = parse_status_line(f"Mono: Playback 12 [{percent}%] [on]")
        assert state.current_volume == percent
        assert state.muted is False

    def test_digits_before_bracket_ignored(self):
        """Test raw playback value before the first '[' is not part of the volume."""
        state = parse_status_line("Mono: Playback 87 [5%] [on]")
        assert state.current_volume == 5

    def test_all_digits_in_segment_concatenated(self):
        """Test every digit after the first '[' is concatenated in order."""
        state = parse_status_line("Front Left: Playback 40 [46%] [-20.00dB] [on]")
        assert state.current_volume == 462000

    def test_unmute_clears_previous_mute(self):
        """Test an "on" line resets muted from a prior muted state."""
        previous = VolumeState(current_volume=30, muted=True)
        state = parse_status_line("Mono: Playback 50 [60%] [on]", previous)
        assert state == VolumeState(current_volume=60, muted=False)


class TestParseMuted:
    """Lines whose bracketed segment contains "off" but not "on"."""

    def test_muted_keeps_previous_volume(self):
        """Test volume is not re-parsed when muted."""
        previous = VolumeState(current_volume=75, muted=False)
        state = parse_status_line("Mono: Playback 0 [0%] [off]", previous)
        assert state.muted is True
        assert state.current_volume == 75

    def test_muted_from_default_state(self):
        """Test muting from the default state keeps volume at 0."""
        state = parse_status_line("Mono: Playback 0 [0%] [off]")
        assert state == VolumeState(current_volume=0, muted=True)

    def test_previous_state_not_modified(self):
        """Test parsing returns a new state instead of mutating the old one."""
        previous = VolumeState(current_volume=42, muted=False)
        parse_status_line("Mono: Playback 0 [0%] [off]", previous)
        assert previous == VolumeState(current_volume=42, muted=False)

    def test_on_checked_before_off(self):
        """Test "on" wins when both tokens are present."""
        state = parse_status_line("Mono: Playback 50 [10%] [off] [on]")
        assert state.muted is False
        assert state.current_volume == 10


class TestParseIdempotence:
    """Parsing the same line twice from the same state gives the same state."""

    @pytest.mark.parametrize("line", [
        "Mono: Playback 50 [75%] [on]",
        "Mono: Playback 0 [0%] [off]",
    ])
    def test_same_line_same_state(self, line):
        start = VolumeState(current_volume=20, muted=False)
        assert parse_status_line(line, start) == parse_status_line(line, start)


class TestParseErrors:
    """Lines the parser rejects."""

    def test_missing_bracket(self):
        """Test missing '[' is malformed output."""
        with pytest.raises(StatusParseError) as exc_info:
            parse_status_line("no brackets here")
        assert exc_info.value.kind == ParseErrorKind.MALFORMED_OUTPUT
        assert exc_info.value.message == "couldn't parse amixer output"

    def test_empty_line(self):
        """Test empty line is malformed output."""
        with pytest.raises(StatusParseError) as exc_info:
            parse_status_line("")
        assert exc_info.value.kind == ParseErrorKind.MALFORMED_OUTPUT

    def test_no_mute_token(self):
        """Test percentage without on/off is ambiguous."""
        with pytest.raises(StatusParseError) as exc_info:
            parse_status_line("Mono: Playback 50 [50%]")
        assert exc_info.value.kind == ParseErrorKind.AMBIGUOUS_MUTE_STATE

    def test_mute_token_before_bracket_ignored(self):
        """Test "on" before the first '[' does not count."""
        with pytest.raises(StatusParseError) as exc_info:
            parse_status_line("Mono on: Playback 50 [50%]")
        assert exc_info.value.kind == ParseErrorKind.AMBIGUOUS_MUTE_STATE

    def test_no_digits(self):
        """Test unmuted segment without digits is an invalid percentage."""
        with pytest.raises(StatusParseError) as exc_info:
            parse_status_line("Mono: Playback [on]")
        assert exc_info.value.kind == ParseErrorKind.INVALID_PERCENTAGE
        assert "``" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_percentage_too_large(self):
        """Test digit strings beyond the 32-bit range are rejected."""
        with pytest.raises(StatusParseError) as exc_info:
            parse_status_line("Mono: Playback [99999999999%] [on]")
        assert exc_info.value.kind == ParseErrorKind.INVALID_PERCENTAGE
        assert "`99999999999`" in exc_info.value.message
        assert "too large" in exc_info.value.message
