"""Serial port I/O handler for the relay line protocol.

This module provides a cross-platform serial communication interface
with robust error handling and port discovery capabilities.
"""

from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING
import time

import serial
from serial.tools import list_ports

from arc.config.config_models import ChannelConfig
from arc.core.exceptions import (
    SerialPortError,
    SerialPortBusyError,
    ConnectionTimeoutError,
    ReadTimeoutError
)

# Avoid circular import for type hints
if TYPE_CHECKING:
    from arc.logging.communication_logger import CommunicationLogger


@dataclass(frozen=True)
class PortInfo:
    """Serial port information from discovery.

    Attributes:
        device: Port device path (e.g., '/dev/ttyACM0', 'COM3')
        description: Human-readable port description
        hwid: Hardware identifier (USB VID:PID, etc.)
    """
    device: str
    description: str
    hwid: str


class SerialHandler:
    """Manages one serial channel to the relay controller.

    Opens the port with a fixed ChannelConfig and exchanges single
    newline-terminated lines. Wraps pyserial exceptions in custom types.
    Intended to be used as a context manager so the port is released on
    every exit path.

    Example:
        >>> with SerialHandler('/dev/ttyACM0') as handler:
        ...     handler.write_line('H5')
        ...     reply = handler.read_line()
    """

    def __init__(self,
                 port: str,
                 channel: Optional[ChannelConfig] = None,
                 logger: Optional['CommunicationLogger'] = None):
        """Initialize handler with port configuration.

        Args:
            port: Serial port device path
            channel: Line parameters (default ChannelConfig())
            logger: Optional CommunicationLogger for logging port events (default None)
        """
        self.port = port
        self.channel = channel or ChannelConfig()
        self.logger = logger
        self._serial: Optional[serial.Serial] = None
        self._open_time: Optional[float] = None  # Track session duration

    def open(self) -> None:
        """Open serial port and configure settings.

        Raises:
            SerialPortError: Port doesn't exist or permission denied
            SerialPortBusyError: Port already in use
            ConnectionTimeoutError: Open timeout exceeded
        """
        if self._serial is not None and self._serial.is_open:
            return  # Already open

        try:
            self._serial = serial.Serial(
                port=self.port,
                baudrate=self.channel.baud_rate,
                bytesize=self.channel.bytesize,
                parity=self.channel.parity,
                stopbits=self.channel.stopbits,
                timeout=self.channel.read_timeout
            )
            self._open_time = time.time()

            if self.logger:
                self.logger.log_port_event(
                    event="Port opened",
                    port=self.port,
                    details={
                        "baud_rate": self.channel.baud_rate,
                        "bytesize": self.channel.bytesize,
                        "parity": self.channel.parity,
                        "stopbits": self.channel.stopbits,
                        "timeout": self.channel.read_timeout
                    }
                )

        except serial.SerialException as e:
            error_msg = str(e).lower()

            if self.logger:
                self.logger.log_error(
                    source="SerialHandler",
                    error=f"Failed to open port: {e}",
                    details={"port": self.port, "error_type": type(e).__name__}
                )

            if 'permission denied' in error_msg or 'access denied' in error_msg:
                raise SerialPortError(
                    f"Permission denied accessing port {self.port}",
                    self.port,
                    e
                )
            elif 'busy' in error_msg or 'in use' in error_msg:
                raise SerialPortBusyError(
                    f"Port {self.port} is already in use",
                    self.port,
                    e
                )
            elif 'timeout' in error_msg:
                raise ConnectionTimeoutError(
                    f"Timeout opening port {self.port}",
                    self.port,
                    e
                )
            else:
                raise SerialPortError(
                    f"Failed to open port {self.port}: {e}",
                    self.port,
                    e
                )
        except Exception as e:
            if self.logger:
                self.logger.log_error(
                    source="SerialHandler",
                    error=f"Unexpected error opening port: {e}",
                    details={"port": self.port, "error_type": type(e).__name__}
                )

            raise SerialPortError(
                f"Unexpected error opening port {self.port}: {e}",
                self.port,
                e
            )

    def close(self) -> None:
        """Close serial port and release resources.

        Safe to call multiple times; does nothing if port is already closed.
        """
        if self._serial is None or not self._serial.is_open:
            return

        try:
            self._serial.close()

            if self.logger:
                details = None
                if self._open_time:
                    details = {"session_duration_seconds": time.time() - self._open_time}
                self.logger.log_port_event(
                    event="Port closed",
                    port=self.port,
                    details=details
                )
        except Exception as e:
            if self.logger:
                self.logger.log_error(
                    source="SerialHandler",
                    error=f"Error closing port: {e}",
                    details={"port": self.port}
                )
        finally:
            self._open_time = None

    def write_line(self, data: str) -> int:
        """Write one line to the serial port.

        Appends the channel line terminator to the data.

        Args:
            data: Line content (terminator added automatically)

        Returns:
            Number of bytes written

        Raises:
            SerialPortError: Port not open or write failed
        """
        if self._serial is None or not self._serial.is_open:
            raise SerialPortError("Cannot write to closed port", self.port, None)

        try:
            message = f"{data}{self.channel.line_terminator}"
            bytes_written = self._serial.write(message.encode('ascii'))
            self._serial.flush()  # Ensure data is sent
            return bytes_written
        except serial.SerialException as e:
            raise SerialPortError(
                f"Failed to write to port {self.port}: {e}",
                self.port,
                e
            )
        except Exception as e:
            raise SerialPortError(
                f"Unexpected error writing to port {self.port}: {e}",
                self.port,
                e
            )

    def read_line(self) -> str:
        """Read one line, waiting at most the channel read timeout.

        Returns:
            Decoded line including any trailing terminator characters

        Raises:
            ReadTimeoutError: No terminated line arrived in time
            SerialPortError: Port not open or read failed
        """
        if self._serial is None or not self._serial.is_open:
            raise SerialPortError("Cannot read from closed port", self.port, None)

        terminator = self.channel.line_terminator.encode('ascii')
        try:
            # pyserial applies the port timeout to the whole read_until call
            line_bytes = self._serial.read_until(terminator)
        except serial.SerialException as e:
            raise SerialPortError(
                f"Failed to read from port {self.port}: {e}",
                self.port,
                e
            )
        except Exception as e:
            raise SerialPortError(
                f"Unexpected error reading from port {self.port}: {e}",
                self.port,
                e
            )

        line = line_bytes.decode('ascii', errors='replace')
        if not line_bytes.endswith(terminator):
            raise ReadTimeoutError(self.port, self.channel.read_timeout, partial=line)
        return line

    def is_connected(self) -> bool:
        """Check if port is currently open.

        Returns:
            True if port is open, False otherwise
        """
        return self._serial is not None and self._serial.is_open

    @staticmethod
    def discover_ports() -> List[PortInfo]:
        """Enumerate available serial ports.

        Cross-platform port discovery using pyserial's list_ports.

        Returns:
            List of PortInfo objects with path, description, hwid

        Example:
            >>> for port in SerialHandler.discover_ports():
            ...     print(f"{port.device}: {port.description}")
            /dev/ttyACM0: Arduino Uno
        """
        ports = []
        for port_info in list_ports.comports():
            ports.append(PortInfo(
                device=port_info.device,
                description=port_info.description or "Unknown",
                hwid=port_info.hwid or "Unknown"
            ))
        return ports

    def __enter__(self):
        """Context manager entry: open port."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit: close port."""
        self.close()
        return False

    def __repr__(self) -> str:
        """String representation of handler."""
        status = "open" if self.is_connected() else "closed"
        return f"SerialHandler(port='{self.port}', baud={self.channel.baud_rate}, status={status})"
