"""Run orchestration: validate, locate, execute, map to a ReturnCode."""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from arc.config.config_models import DeviceConfig
from arc.core.command import RelayCommand, parse_command
from arc.core.device_locator import DeviceLocator
from arc.core.exceptions import InvalidCommandError, DeviceNotFoundError
from arc.core.return_codes import ReturnCode
from arc.core.transaction import TransactionExecutor, TransactionResult, TransactionStatus

if TYPE_CHECKING:
    from arc.logging.communication_logger import CommunicationLogger


@dataclass(frozen=True)
class RunOutcome:
    """Everything known about one run.

    Attributes:
        code: Process-level outcome
        command: Parsed command, None if validation failed
        port: Located device port, None if not found
        transaction: Transaction result, None if no exchange happened
        detail: Diagnostic message for non-OK outcomes
    """
    code: ReturnCode
    command: Optional[RelayCommand] = None
    port: Optional[str] = None
    transaction: Optional[TransactionResult] = None
    detail: Optional[str] = None


class RelayController:
    """Drives one relay command from text to ReturnCode.

    Each step short-circuits on failure and nothing is retried. An invalid
    command never reaches discovery or the serial channel.

    Example:
        >>> controller = RelayController()
        >>> controller.run("H5").code
        <ReturnCode.OK: 0>
    """

    def __init__(self,
                 config: Optional[DeviceConfig] = None,
                 locator: Optional[DeviceLocator] = None,
                 executor: Optional[TransactionExecutor] = None,
                 logger: Optional['CommunicationLogger'] = None):
        self.config = config or DeviceConfig()
        self.logger = logger
        self.locator = locator or DeviceLocator(logger=logger)
        self.executor = executor or TransactionExecutor(self.config, logger=logger)

    def run(self, raw_command: str) -> RunOutcome:
        """Validate ``raw_command``, find the controller, and send it.

        Args:
            raw_command: Command text, e.g. ``"H5"``

        Returns:
            RunOutcome with the ReturnCode and intermediate results
        """
        try:
            command = parse_command(raw_command)
        except InvalidCommandError as e:
            self._log_failure(str(e))
            return RunOutcome(code=ReturnCode.INVALID_COMMAND, detail=str(e))

        try:
            port = self.locator.require(self.config.descriptor)
        except DeviceNotFoundError as e:
            self._log_failure(str(e))
            return RunOutcome(code=ReturnCode.NOT_FOUND, command=command, detail=str(e))

        result = self.executor.execute(port, command)
        return RunOutcome(
            code=self.map_result(result),
            command=command,
            port=port,
            transaction=result,
            detail=result.error_message
        )

    @staticmethod
    def map_result(result: TransactionResult) -> ReturnCode:
        """Collapse a transaction status to its process-level code.

        A fault reported by the device counts as a communication failure.
        """
        if result.status == TransactionStatus.SUCCESS:
            return ReturnCode.OK
        return ReturnCode.COMMUNICATION_FAIL

    def _log_failure(self, message: str) -> None:
        if self.logger:
            self.logger.log_error(source="RelayController", error=message)
