"""Unit tests for RelayController orchestration and ReturnCode mapping."""

import pytest
from unittest.mock import Mock

from arc.config.config_models import DeviceConfig
from arc.core.device_locator import DeviceLocator
from arc.core.exceptions import DeviceNotFoundError
from arc.core.relay_controller import RelayController, RunOutcome
from arc.core.return_codes import ReturnCode
from arc.core.transaction import TransactionExecutor, TransactionResult, TransactionStatus


def make_result(status, reply=None):
    return TransactionResult(command="H5", port="COM3", status=status, reply=reply)


def make_controller(port="COM3", status=TransactionStatus.SUCCESS, locate_error=None):
    locator = Mock(spec=DeviceLocator)
    if locate_error:
        locator.require.side_effect = locate_error
    else:
        locator.require.return_value = port

    executor = Mock(spec=TransactionExecutor)
    executor.execute.return_value = make_result(status)

    controller = RelayController(DeviceConfig(), locator=locator, executor=executor)
    return controller, locator, executor


class TestReturnCode:
    """Test ReturnCode values and labels."""

    def test_values(self):
        assert ReturnCode.OK == 0
        assert ReturnCode.WRONG_ARGS == 1
        assert ReturnCode.INVALID_COMMAND == 2
        assert ReturnCode.NOT_FOUND == 3
        assert ReturnCode.COMMUNICATION_FAIL == 4

    def test_labels(self):
        assert ReturnCode.OK.label == "OK"
        assert ReturnCode.WRONG_ARGS.label == "ARC_WRONG_ARGS"
        assert ReturnCode.COMMUNICATION_FAIL.label == "ARC_COMMUNICATION_FAIL"


class TestRelayControllerRun:
    """Test RelayController.run() short-circuiting."""

    def test_success(self):
        controller, locator, executor = make_controller()

        outcome = controller.run("H5")

        assert outcome.code == ReturnCode.OK
        assert outcome.port == "COM3"
        assert outcome.command.text == "H5"
        locator.require.assert_called_once_with("Arduino")
        executor.execute.assert_called_once_with("COM3", outcome.command)

    @pytest.mark.parametrize("raw", ["Z5", "L20", "L1", "Lx", "H123", ""])
    def test_invalid_command_never_reaches_io(self, raw):
        controller, locator, executor = make_controller()

        outcome = controller.run(raw)

        assert outcome.code == ReturnCode.INVALID_COMMAND
        assert outcome.command is None
        locator.require.assert_not_called()
        executor.execute.assert_not_called()

    def test_not_found(self):
        controller, locator, executor = make_controller(
            locate_error=DeviceNotFoundError("Arduino")
        )

        outcome = controller.run("H5")

        assert outcome.code == ReturnCode.NOT_FOUND
        assert outcome.port is None
        assert "Arduino" in outcome.detail
        executor.execute.assert_not_called()

    def test_fault_reported_maps_to_communication_fail(self):
        controller, _, _ = make_controller(status=TransactionStatus.FAULT_REPORTED)

        outcome = controller.run("H5")

        assert outcome.code == ReturnCode.COMMUNICATION_FAIL
        assert outcome.transaction.status == TransactionStatus.FAULT_REPORTED

    def test_communication_failure(self):
        controller, _, _ = make_controller(status=TransactionStatus.COMMUNICATION_FAILURE)

        assert controller.run("H5").code == ReturnCode.COMMUNICATION_FAIL

    def test_custom_descriptor(self):
        locator = Mock(spec=DeviceLocator)
        locator.require.return_value = "COM5"
        executor = Mock(spec=TransactionExecutor)
        executor.execute.return_value = make_result(TransactionStatus.SUCCESS)

        controller = RelayController(
            DeviceConfig(descriptor="CH340"), locator=locator, executor=executor
        )
        controller.run("L2")

        locator.require.assert_called_once_with("CH340")

    def test_invalid_command_logged(self):
        mock_logger = Mock()
        controller = RelayController(
            DeviceConfig(),
            locator=Mock(spec=DeviceLocator),
            executor=Mock(spec=TransactionExecutor),
            logger=mock_logger
        )

        controller.run("Z5")

        mock_logger.log_error.assert_called_once()


class TestMapResult:
    """Test RelayController.map_result()."""

    @pytest.mark.parametrize("status, code", [
        (TransactionStatus.SUCCESS, ReturnCode.OK),
        (TransactionStatus.FAULT_REPORTED, ReturnCode.COMMUNICATION_FAIL),
        (TransactionStatus.COMMUNICATION_FAILURE, ReturnCode.COMMUNICATION_FAIL),
    ])
    def test_mapping(self, status, code):
        assert RelayController.map_result(make_result(status)) == code


class TestRunOutcome:
    """Test RunOutcome defaults."""

    def test_defaults(self):
        outcome = RunOutcome(code=ReturnCode.WRONG_ARGS)

        assert outcome.command is None
        assert outcome.port is None
        assert outcome.transaction is None
        assert outcome.detail is None
