"""ARC - Arduino Relay Control.

Sets a single pin of an Arduino-based relay board High or Low over a
serial link:
- Command validation (``H5``, ``L12``, ...)
- Board discovery by serial port description
- One command/echo exchange with fault detection
"""

from arc.core import (
    PinLevel,
    RelayCommand,
    parse_command,
    ReturnCode,
    SerialHandler,
    PortInfo,
    DeviceLocator,
    TransactionExecutor,
    TransactionResult,
    TransactionStatus,
    RelayController,
    ArcError,
    InvalidCommandError,
    DeviceNotFoundError,
    SerialPortError,
)

__version__ = "0.1.0"

__all__ = [
    "PinLevel",
    "RelayCommand",
    "parse_command",
    "ReturnCode",
    "SerialHandler",
    "PortInfo",
    "DeviceLocator",
    "TransactionExecutor",
    "TransactionResult",
    "TransactionStatus",
    "RelayController",
    "ArcError",
    "InvalidCommandError",
    "DeviceNotFoundError",
    "SerialPortError",
]
