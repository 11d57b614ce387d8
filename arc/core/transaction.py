"""Single request/response exchange with the relay controller.

This module defines the TransactionResult data model and the
TransactionExecutor that performs one write/read exchange over a freshly
opened serial channel and classifies the controller's reply.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, TYPE_CHECKING
import time

import serial

from arc.config.config_models import ChannelConfig, DeviceConfig
from arc.core.command import RelayCommand
from arc.core.exceptions import ArcError, ReadTimeoutError
from arc.core.serial_handler import SerialHandler

if TYPE_CHECKING:
    from arc.logging.communication_logger import CommunicationLogger


class TransactionStatus(Enum):
    """Outcome of one exchange.

    - SUCCESS: Controller echoed the command
    - FAULT_REPORTED: Controller answered with its fault sentinel
    - COMMUNICATION_FAILURE: Open/write/read failed, timed out, or the
      reply was neither the echo nor the sentinel
    """
    SUCCESS = "success"
    FAULT_REPORTED = "fault_reported"
    COMMUNICATION_FAILURE = "communication_failure"


@dataclass(frozen=True)
class TransactionResult:
    """Immutable result of a relay transaction.

    Attributes:
        command: Command text written to the controller
        port: Serial port used
        status: Classified outcome
        reply: Trimmed reply line, None if no line was received
        execution_time: Seconds from open to classification
        error_message: Diagnostic detail for failures
        timestamp: Unix timestamp when the result was created
    """

    command: str
    port: str
    status: TransactionStatus
    reply: Optional[str] = None
    execution_time: float = 0.0
    error_message: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

    def is_successful(self) -> bool:
        """Check if the controller acknowledged the command."""
        return self.status == TransactionStatus.SUCCESS

    def __str__(self) -> str:
        if self.status == TransactionStatus.COMMUNICATION_FAILURE and self.error_message:
            return f"[{self.status.value}] {self.command} @ {self.port}: {self.error_message}"
        return f"[{self.status.value}] {self.command} @ {self.port} -> {self.reply!r} ({self.execution_time:.3f}s)"


ChannelFactory = Callable[..., SerialHandler]


class TransactionExecutor:
    """Performs one command/echo exchange with the relay controller.

    The channel is opened immediately before the write and closed before
    ``execute`` returns, whatever the outcome. I/O errors never propagate;
    they are reported as COMMUNICATION_FAILURE results.

    Example:
        >>> executor = TransactionExecutor(DeviceConfig())
        >>> result = executor.execute('COM3', parse_command('H5'))
        >>> result.status
        <TransactionStatus.SUCCESS: 'success'>
    """

    def __init__(self,
                 config: Optional[DeviceConfig] = None,
                 channel_factory: Optional[ChannelFactory] = None,
                 logger: Optional['CommunicationLogger'] = None):
        """Initialize executor.

        Args:
            config: Device protocol constants (default DeviceConfig())
            channel_factory: Called as ``factory(port, channel=..., logger=...)``
                to build the channel (default SerialHandler)
            logger: Optional CommunicationLogger
        """
        self.config = config or DeviceConfig()
        self.channel_factory = channel_factory or SerialHandler
        self.logger = logger

    @property
    def channel(self) -> ChannelConfig:
        return self.config.channel

    def execute(self, port: str, command: RelayCommand) -> TransactionResult:
        """Send ``command`` to the controller on ``port`` and classify the reply.

        Args:
            port: Serial port of the located controller
            command: Validated relay command

        Returns:
            TransactionResult; never raises for I/O faults
        """
        text = command.text
        start_time = time.time()
        reply: Optional[str] = None

        try:
            with self.channel_factory(port, channel=self.channel, logger=self.logger) as handler:
                if self.logger:
                    self.logger.log_command(port=port, command=text)
                handler.write_line(text)
                reply = handler.read_line().rstrip()
        except ReadTimeoutError as e:
            return self._finish(port, text, TransactionStatus.COMMUNICATION_FAILURE,
                                None, start_time, f"Timeout: {e}")
        except (ArcError, serial.SerialException, OSError) as e:
            return self._finish(port, text, TransactionStatus.COMMUNICATION_FAILURE,
                                None, start_time, str(e))

        status = self.classify(text, reply)
        error_message = None
        if status == TransactionStatus.FAULT_REPORTED:
            error_message = "Device reported a fault"
        elif status == TransactionStatus.COMMUNICATION_FAILURE:
            error_message = f"Unexpected reply {reply!r}"

        return self._finish(port, text, status, reply, start_time, error_message)

    def classify(self, sent: str, reply: str) -> TransactionStatus:
        """Classify a trimmed reply against the sent command text.

        The fault sentinel is checked first, then the exact echo.
        """
        if reply == self.config.fault_response:
            return TransactionStatus.FAULT_REPORTED
        if reply == sent:
            return TransactionStatus.SUCCESS
        return TransactionStatus.COMMUNICATION_FAILURE

    def _finish(self,
                port: str,
                text: str,
                status: TransactionStatus,
                reply: Optional[str],
                start_time: float,
                error_message: Optional[str]) -> TransactionResult:
        result = TransactionResult(
            command=text,
            port=port,
            status=status,
            reply=reply,
            execution_time=time.time() - start_time,
            error_message=error_message
        )

        if self.logger:
            self.logger.log_response(
                port=port,
                response=reply,
                status=status.name,
                execution_time=result.execution_time,
                command=text,
                error=error_message
            )

        return result
