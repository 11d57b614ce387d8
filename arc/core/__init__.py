"""Core relay protocol components.

This package provides command validation, device discovery and the
serial request/response transaction.
"""

from arc.core.exceptions import (
    ArcError,
    WrongArgumentsError,
    InvalidCommandError,
    DeviceNotFoundError,
    SerialPortError,
    SerialPortBusyError,
    ConnectionTimeoutError,
    ReadTimeoutError,
    ConfigError
)
from arc.core.command import PinLevel, RelayCommand, parse_command, is_valid_command
from arc.core.return_codes import ReturnCode
from arc.core.serial_handler import SerialHandler, PortInfo
from arc.core.device_locator import DeviceLocator
from arc.core.transaction import TransactionExecutor, TransactionResult, TransactionStatus
from arc.core.relay_controller import RelayController, RunOutcome

__all__ = [
    'PinLevel',
    'RelayCommand',
    'parse_command',
    'is_valid_command',
    'ReturnCode',
    'SerialHandler',
    'PortInfo',
    'DeviceLocator',
    'TransactionExecutor',
    'TransactionResult',
    'TransactionStatus',
    'RelayController',
    'RunOutcome',
    'ArcError',
    'WrongArgumentsError',
    'InvalidCommandError',
    'DeviceNotFoundError',
    'SerialPortError',
    'SerialPortBusyError',
    'ConnectionTimeoutError',
    'ReadTimeoutError',
    'ConfigError',
]
