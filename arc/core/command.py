"""Relay command data model and syntax validation.

A relay command sets one digital pin of the controller High or Low. Its
text form is the level letter followed by the pin number, e.g. ``H5`` or
``L12``.
"""

from dataclasses import dataclass
from enum import Enum

from arc.core.exceptions import InvalidCommandError

MIN_PIN = 2  # pins 0 and 1 carry the serial link to the host
MAX_PIN = 19


class PinLevel(Enum):
    """Requested output state of a pin."""
    HIGH = "H"
    LOW = "L"


@dataclass(frozen=True)
class RelayCommand:
    """Immutable, validated relay command.

    Attributes:
        level: Requested pin level
        pin: Pin number (2-19)
    """

    level: PinLevel
    pin: int

    @property
    def text(self) -> str:
        """Canonical wire form of the command, e.g. ``'H5'``."""
        return f"{self.level.value}{self.pin}"

    def __str__(self) -> str:
        return self.text


def parse_command(raw: str) -> RelayCommand:
    """Parse and validate relay command text.

    Rules are applied in order and the first failure wins:

    1. Length is exactly 2 or 3 characters.
    2. First character is ``L`` or ``H`` (case-sensitive).
    3. The remainder is a base-10 non-negative integer.
    4. The pin number lies in 2..19.

    Args:
        raw: Command text as given on the command line

    Returns:
        Parsed RelayCommand

    Raises:
        InvalidCommandError: Any rule is violated

    Example:
        >>> parse_command("H5")
        RelayCommand(level=<PinLevel.HIGH: 'H'>, pin=5)
        >>> parse_command("L20")
        Traceback (most recent call last):
        ...
        arc.core.exceptions.InvalidCommandError: Invalid command 'L20': pin 20 outside 2-19
    """
    if len(raw) not in (2, 3):
        raise InvalidCommandError(raw, f"expected 2 or 3 characters, got {len(raw)}")

    try:
        level = PinLevel(raw[0])
    except ValueError:
        raise InvalidCommandError(raw, "level must be 'L' or 'H'")

    digits = raw[1:]
    # str.isdigit() also accepts superscripts and other unicode digits
    if not (digits.isascii() and digits.isdigit()):
        raise InvalidCommandError(raw, f"pin {digits!r} is not a number")

    pin = int(digits)
    if pin < MIN_PIN or pin > MAX_PIN:
        raise InvalidCommandError(raw, f"pin {pin} outside {MIN_PIN}-{MAX_PIN}")

    return RelayCommand(level=level, pin=pin)


def is_valid_command(raw: str) -> bool:
    """Return True if ``raw`` parses as a relay command."""
    try:
        parse_command(raw)
    except InvalidCommandError:
        return False
    return True
