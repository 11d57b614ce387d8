"""Log data models for communication logging.

This module defines immutable data structures for log entries, providing
structured representation of commands, replies, discovery and serial port
events.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any, Optional
import json


@dataclass(frozen=True)
class LogEntry:
    """Immutable log entry for communication logging.

    Attributes:
        timestamp: When the event occurred
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        source: Component name (SerialHandler, TransactionExecutor, etc.)
        message: Human-readable message describing the event
        details: Additional structured data (arbitrary dict)
        port: Serial port name (optional)
        command: Relay command sent (optional)
        response: Reply received (optional)
        status: Transaction status name (optional)
        execution_time: Transaction time in seconds (optional)
        error: Error message if applicable (optional)

    Example:
        >>> entry = LogEntry(
        ...     timestamp=datetime(2025, 1, 12, 10, 30, 15, 234000),
        ...     level="INFO",
        ...     source="TransactionExecutor",
        ...     message="Sending command",
        ...     port="COM3",
        ...     command="H5"
        ... )
        >>> entry.to_string()
        '2025-01-12 10:30:15.234 | INFO    | TransactionExecutor | Sending command | PORT: COM3 | CMD: H5'
    """

    timestamp: datetime
    level: str  # DEBUG, INFO, WARNING, ERROR
    source: str  # Component name
    message: str
    details: Optional[Dict[str, Any]] = None

    port: Optional[str] = None
    command: Optional[str] = None
    response: Optional[str] = None
    status: Optional[str] = None
    execution_time: Optional[float] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert log entry to dictionary for serialization.

        Returns:
            Dictionary with all fields, ISO format for timestamp
        """
        return {
            'timestamp': self.timestamp.isoformat(),
            'level': self.level,
            'source': self.source,
            'message': self.message,
            'details': self.details,
            'port': self.port,
            'command': self.command,
            'response': self.response,
            'status': self.status,
            'execution_time': self.execution_time,
            'error': self.error
        }

    def to_string(self) -> str:
        """Format log entry as a single human-readable line.

        Returns:
            "YYYY-MM-DD HH:MM:SS.mmm | LEVEL | SOURCE | MESSAGE" plus any
            populated port/command/reply fields
        """
        timestamp_str = self.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        base = f"{timestamp_str} | {self.level:7} | {self.source:15} | {self.message}"

        if self.port:
            base += f" | PORT: {self.port}"
        if self.command:
            base += f" | CMD: {self.command}"
        if self.response is not None:
            base += f" | REPLY: {self.response!r}"
        if self.status:
            base += f" | STATUS: {self.status}"
        if self.execution_time is not None:
            base += f" | TIME: {self.execution_time:.3f}s"
        if self.error:
            base += f" | ERROR: {self.error}"
        if self.details:
            pairs = ", ".join(f"{k}={v}" for k, v in self.details.items())
            base += f" | {pairs}"

        return base

    def to_json(self) -> str:
        """Convert log entry to JSON string."""
        return json.dumps(self.to_dict(), default=str)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LogEntry':
        """Create LogEntry from dictionary.

        Args:
            data: Dictionary with log entry fields

        Returns:
            LogEntry instance
        """
        timestamp = data['timestamp']
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)

        return cls(
            timestamp=timestamp,
            level=data['level'],
            source=data['source'],
            message=data['message'],
            details=data.get('details'),
            port=data.get('port'),
            command=data.get('command'),
            response=data.get('response'),
            status=data.get('status'),
            execution_time=data.get('execution_time'),
            error=data.get('error')
        )

    @classmethod
    def from_json(cls, json_str: str) -> 'LogEntry':
        """Create LogEntry from JSON string."""
        return cls.from_dict(json.loads(json_str))
