"""Custom exception hierarchy for Arduino Relay Control.

This module defines all custom exceptions raised by the relay protocol
layer, providing structured error handling with relevant context for
debugging.
"""

from typing import Optional


class ArcError(Exception):
    """Base exception for all relay control errors.

    All custom exceptions inherit from this base class to allow
    catching all tool-specific errors with a single except clause.
    """
    pass


class WrongArgumentsError(ArcError):
    """Command line did not contain exactly one relay command."""
    pass


class InvalidCommandError(ArcError):
    """Relay command text failed syntax validation.

    Attributes:
        command: Command text as supplied by the caller
        reason: Which validation rule rejected it
    """

    def __init__(self, command: str, reason: str):
        """Initialize InvalidCommandError.

        Args:
            command: Offending command text
            reason: Human-readable description of the failed rule
        """
        super().__init__(f"Invalid command {command!r}: {reason}")
        self.command = command
        self.reason = reason


class DeviceNotFoundError(ArcError):
    """No enumerated serial device matched the descriptor.

    Also raised when enumeration itself failed; the two cases are not
    distinguished by callers.

    Attributes:
        descriptor: Descriptor substring that was searched for
        cause: Enumeration failure, if any
    """

    def __init__(self, descriptor: str, cause: Optional[Exception] = None):
        super().__init__(f"No serial device matching {descriptor!r}")
        self.descriptor = descriptor
        self.cause = cause

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.cause:
            return f"{base_msg} (cause: {self.cause})"
        return base_msg


class SerialPortError(ArcError):
    """Serial port communication error.

    Raised when serial port operations fail (open, read, write).
    Captures port identifier and underlying OS error for diagnostics.

    Attributes:
        port: Serial port identifier (e.g., '/dev/ttyACM0', 'COM3')
        os_error: Original exception from pyserial or OS (if available)
    """

    def __init__(self, message: str, port: str, os_error: Optional[Exception] = None):
        """Initialize SerialPortError.

        Args:
            message: Human-readable error description
            port: Serial port identifier
            os_error: Original exception from pyserial/OS
        """
        super().__init__(message)
        self.port = port
        self.os_error = os_error

    def __str__(self) -> str:
        """Format error message with port context."""
        base_msg = super().__str__()
        if self.os_error:
            return f"{base_msg} (port: {self.port}, cause: {self.os_error})"
        return f"{base_msg} (port: {self.port})"


class SerialPortBusyError(SerialPortError):
    """Port is already in use by another process."""
    pass


class ConnectionTimeoutError(SerialPortError):
    """Opening the port timed out."""
    pass


class ReadTimeoutError(SerialPortError):
    """No complete line arrived within the read timeout.

    Attributes:
        timeout: Read timeout in seconds
        partial: Bytes received before the timeout expired (decoded)
    """

    def __init__(self, port: str, timeout: float, partial: str = ""):
        super().__init__(f"No reply within {timeout:.3f}s", port, None)
        self.timeout = timeout
        self.partial = partial


class ConfigError(ArcError):
    """Configuration file or environment override is invalid.

    Attributes:
        errors: List of validation error messages
    """

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        base_msg = super().__str__()
        if not self.errors:
            return base_msg
        error_list = '\n  - '.join(self.errors)
        return f"{base_msg}\n  - {error_list}"
