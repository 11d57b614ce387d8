"""Communication logger for relay transactions.

This module provides the CommunicationLogger class, a central coordinator
for logging serial communication with the relay controller. Manages file
and console destinations plus an in-memory buffer, with log level filtering
and convenience methods for common logging operations.
"""

from collections import deque
from datetime import datetime
from typing import Optional, List, Dict, Any
import sys

from arc.logging.log_models import LogEntry
from arc.logging.file_handler import FileHandler
from arc.config.config_models import LogLevel


class CommunicationLogger:
    """Central coordinator for communication logging.

    Attributes:
        log_level: Current log level name (DEBUG, INFO, WARNING, ERROR)
        enable_file: Whether file logging is enabled
        enable_console: Whether console logging (stderr) is enabled
        log_file_path: Path to log file (if file logging enabled)

    Example:
        >>> logger = CommunicationLogger(
        ...     log_level=LogLevel.INFO,
        ...     enable_file=True,
        ...     log_file_path="~/.arc/logs/arc.log"
        ... )
        >>> logger.log_command(port="COM3", command="H5")
        >>> logger.log_response(port="COM3", response="H5", status="SUCCESS", execution_time=0.05)
        >>> logger.close()
    """

    _LEVEL_PRIORITY = {
        "DEBUG": 0,
        "INFO": 1,
        "WARNING": 2,
        "ERROR": 3
    }

    def __init__(
        self,
        log_level: LogLevel = LogLevel.INFO,
        enable_file: bool = False,
        enable_console: bool = True,
        log_file_path: Optional[str] = None,
        max_file_size_mb: int = 10,
        backup_count: int = 5
    ):
        """Initialize CommunicationLogger with output destinations and log level.

        Args:
            log_level: Log level for filtering (default: INFO)
            enable_file: Enable file logging (default: False)
            enable_console: Enable console logging to stderr (default: True)
            log_file_path: Path to log file (required if enable_file=True)
            max_file_size_mb: Maximum file size before rotation (default: 10)
            backup_count: Number of backup files to keep (default: 5)

        Raises:
            ValueError: If enable_file=True but log_file_path is None
        """
        self.log_level = log_level.value if isinstance(log_level, LogLevel) else log_level
        self.enable_file = enable_file
        self.enable_console = enable_console
        self.log_file_path = log_file_path

        self._buffer: deque = deque(maxlen=200)

        self._file_handler: Optional[FileHandler] = None
        if self.enable_file:
            if not log_file_path:
                raise ValueError("log_file_path required when enable_file=True")
            try:
                self._file_handler = FileHandler(
                    log_file_path=log_file_path,
                    max_size_mb=max_file_size_mb,
                    backup_count=backup_count
                )
            except OSError as e:
                print(f"WARNING: Failed to initialize file logging: {e}", file=sys.stderr)
                self._file_handler = None

    def log(self, entry: LogEntry) -> None:
        """Log an entry to all enabled destinations with level filtering.

        Args:
            entry: LogEntry to log
        """
        if not self._should_log(entry.level):
            return

        self._buffer.append(entry)

        if self._file_handler:
            self._file_handler.write(entry)

        if self.enable_console:
            print(entry.to_string(), file=sys.stderr)

    def _should_log(self, entry_level: str) -> bool:
        entry_priority = self._LEVEL_PRIORITY.get(entry_level, 0)
        current_priority = self._LEVEL_PRIORITY.get(self.log_level, 0)
        return entry_priority >= current_priority

    def log_command(self, port: str, command: str) -> None:
        """Log relay command about to be written (convenience method)."""
        self.log(LogEntry(
            timestamp=datetime.now(),
            level="INFO",
            source="TransactionExecutor",
            message="Sending command",
            port=port,
            command=command
        ))

    def log_response(
        self,
        port: str,
        response: Optional[str],
        status: str,
        execution_time: float,
        command: Optional[str] = None,
        error: Optional[str] = None
    ) -> None:
        """Log the classified reply of a transaction (convenience method).

        Args:
            port: Serial port name (e.g., "COM3")
            response: Trimmed reply, None if nothing was received
            status: Transaction status name (SUCCESS, FAULT_REPORTED, COMMUNICATION_FAILURE)
            execution_time: Transaction time in seconds
            command: Command that was sent (optional)
            error: Failure detail (optional)
        """
        if status == "SUCCESS":
            level = "INFO"
        elif status == "FAULT_REPORTED":
            level = "WARNING"
        else:
            level = "ERROR"

        self.log(LogEntry(
            timestamp=datetime.now(),
            level=level,
            source="TransactionExecutor",
            message="Transaction finished",
            port=port,
            command=command,
            response=response,
            status=status,
            execution_time=execution_time,
            error=error
        ))

    def log_port_event(
        self,
        event: str,
        port: str,
        details: Optional[Dict[str, Any]] = None,
        level: str = "INFO"
    ) -> None:
        """Log serial port event such as "Port opened" (convenience method)."""
        self.log(LogEntry(
            timestamp=datetime.now(),
            level=level,
            source="SerialHandler",
            message=event,
            port=port,
            details=details
        ))

    def log_discovery(self, descriptor: str, scanned: int, matched: List[str]) -> None:
        """Log the result of a device discovery scan (convenience method).

        Args:
            descriptor: Descriptor substring searched for
            scanned: Number of ports enumerated
            matched: Port names whose description matched, in order
        """
        self.log(LogEntry(
            timestamp=datetime.now(),
            level="INFO" if matched else "WARNING",
            source="DeviceLocator",
            message=f"Scanned {scanned} port(s) for {descriptor!r}",
            details={"matched": matched}
        ))

    def log_error(
        self,
        source: str,
        error: str,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log error event (convenience method)."""
        self.log(LogEntry(
            timestamp=datetime.now(),
            level="ERROR",
            source=source,
            message="Error occurred",
            error=error,
            details=details
        ))

    def set_level(self, level: LogLevel) -> None:
        """Change log level dynamically."""
        self.log_level = level.value if isinstance(level, LogLevel) else level

    def get_entries(self, limit: Optional[int] = None) -> List[LogEntry]:
        """Get logged entries from the in-memory buffer, oldest first.

        Args:
            limit: Return only the most recent ``limit`` entries
        """
        entries = list(self._buffer)
        if limit:
            entries = entries[-limit:]
        return entries

    def flush(self) -> None:
        """Flush buffered file writes to disk."""
        if self._file_handler:
            self._file_handler.flush()

    def close(self) -> None:
        """Close the file handler, flushing pending writes."""
        if self._file_handler:
            self._file_handler.close()
            self._file_handler = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
