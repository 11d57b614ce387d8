"""Unit tests for relay command parsing and validation."""

import pytest

from arc.core.command import PinLevel, RelayCommand, parse_command, is_valid_command
from arc.core.exceptions import InvalidCommandError, ArcError


class TestRelayCommand:
    """Test RelayCommand dataclass."""

    def test_text_high(self):
        """Test canonical text for a HIGH command."""
        assert RelayCommand(PinLevel.HIGH, 5).text == "H5"

    def test_text_low_two_digit_pin(self):
        """Test canonical text for a two-digit pin."""
        assert RelayCommand(PinLevel.LOW, 12).text == "L12"

    def test_str_is_text(self):
        """Test str() returns wire form."""
        assert str(RelayCommand(PinLevel.LOW, 2)) == "L2"

    def test_immutable(self):
        """Test command cannot be modified after creation."""
        command = RelayCommand(PinLevel.HIGH, 5)

        with pytest.raises(AttributeError):
            command.pin = 6


class TestParseCommandValid:
    """Test commands that pass validation."""

    @pytest.mark.parametrize("pin", range(2, 20))
    def test_every_valid_pin_high_and_low(self, pin):
        """Test L<pin> and H<pin> parse for every pin 2-19."""
        assert parse_command(f"L{pin}") == RelayCommand(PinLevel.LOW, pin)
        assert parse_command(f"H{pin}") == RelayCommand(PinLevel.HIGH, pin)

    def test_lower_boundary(self):
        """Test pin 2 is the lowest accepted pin."""
        assert parse_command("H2").pin == 2

    def test_upper_boundary(self):
        """Test pin 19 is the highest accepted pin."""
        assert parse_command("L19").pin == 19

    def test_leading_zero_is_canonicalised(self):
        """Test a leading zero parses and is dropped from the text form."""
        command = parse_command("H05")

        assert command.pin == 5
        assert command.text == "H5"


class TestParseCommandInvalid:
    """Test each validation rule."""

    @pytest.mark.parametrize("raw", ["", "H", "H123", "L1000", "HIGH5"])
    def test_wrong_length(self, raw):
        """Test strings whose length is not 2 or 3 are rejected."""
        with pytest.raises(InvalidCommandError) as exc_info:
            parse_command(raw)

        assert "2 or 3 characters" in exc_info.value.reason

    @pytest.mark.parametrize("raw", ["Z5", "h5", "l12", "X19", "55", " 5"])
    def test_bad_level(self, raw):
        """Test first character must be exactly L or H."""
        with pytest.raises(InvalidCommandError) as exc_info:
            parse_command(raw)

        assert "'L' or 'H'" in exc_info.value.reason

    @pytest.mark.parametrize("raw", ["Lx", "H1x", "H+5", "H-5", "H 5", "H5 ", "H²"])
    def test_non_numeric_pin(self, raw):
        """Test pin must consist of ASCII digits only."""
        with pytest.raises(InvalidCommandError) as exc_info:
            parse_command(raw)

        assert "not a number" in exc_info.value.reason

    @pytest.mark.parametrize("raw", ["L0", "H1", "L00", "H01", "L20", "H99"])
    def test_pin_out_of_range(self, raw):
        """Test pins at or below 1 and at or above 20 are rejected."""
        with pytest.raises(InvalidCommandError) as exc_info:
            parse_command(raw)

        assert "outside 2-19" in exc_info.value.reason

    def test_first_failing_rule_wins(self):
        """Test length is checked before level."""
        with pytest.raises(InvalidCommandError) as exc_info:
            parse_command("Z1234")

        assert "2 or 3 characters" in exc_info.value.reason

    def test_error_carries_command(self):
        """Test exception records offending text."""
        with pytest.raises(InvalidCommandError) as exc_info:
            parse_command("L20")

        assert exc_info.value.command == "L20"
        assert "L20" in str(exc_info.value)
        assert isinstance(exc_info.value, ArcError)


class TestIsValidCommand:
    """Test is_valid_command() helper."""

    def test_valid(self):
        assert is_valid_command("H5") is True

    def test_invalid(self):
        assert is_valid_command("L20") is False
        assert is_valid_command("Z5") is False
