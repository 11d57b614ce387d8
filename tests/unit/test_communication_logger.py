"""Unit tests for CommunicationLogger."""

import pytest
from datetime import datetime

from arc.logging.communication_logger import CommunicationLogger
from arc.logging.log_models import LogEntry
from arc.config.config_models import LogLevel


class TestCommunicationLogger:
    """Test suite for CommunicationLogger class."""

    def test_logger_creation_file_only(self, tmp_path):
        log_file = tmp_path / "arc.log"
        logger = CommunicationLogger(
            log_level=LogLevel.INFO,
            enable_file=True,
            enable_console=False,
            log_file_path=str(log_file)
        )

        assert logger.log_level == "INFO"
        assert logger._file_handler is not None

        logger.close()
        assert log_file.exists()

    def test_logger_no_file_path_raises(self):
        with pytest.raises(ValueError, match="log_file_path required"):
            CommunicationLogger(enable_file=True, log_file_path=None)

    def test_level_filtering(self):
        logger = CommunicationLogger(log_level=LogLevel.WARNING, enable_console=False)

        logger.log_command(port="COM3", command="H5")
        logger.log_error(source="Test", error="boom")

        entries = logger.get_entries()
        assert len(entries) == 1
        assert entries[0].level == "ERROR"

    def test_set_level(self):
        logger = CommunicationLogger(log_level=LogLevel.ERROR, enable_console=False)
        logger.set_level(LogLevel.DEBUG)

        logger.log_command(port="COM3", command="H5")

        assert len(logger.get_entries()) == 1

    def test_console_output_goes_to_stderr(self, capsys):
        logger = CommunicationLogger(enable_console=True)

        logger.log_command(port="COM3", command="H5")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "CMD: H5" in captured.err

    @pytest.mark.parametrize("status, level", [
        ("SUCCESS", "INFO"),
        ("FAULT_REPORTED", "WARNING"),
        ("COMMUNICATION_FAILURE", "ERROR"),
    ])
    def test_response_level_by_status(self, status, level):
        logger = CommunicationLogger(log_level=LogLevel.DEBUG, enable_console=False)

        logger.log_response(port="COM3", response="H5", status=status, execution_time=0.01)

        assert logger.get_entries()[-1].level == level

    def test_log_discovery(self):
        logger = CommunicationLogger(enable_console=False)

        logger.log_discovery(descriptor="Arduino", scanned=2, matched=[])

        entry = logger.get_entries()[-1]
        assert entry.level == "WARNING"
        assert entry.source == "DeviceLocator"
        assert entry.details == {"matched": []}

    def test_log_port_event(self):
        logger = CommunicationLogger(enable_console=False)

        logger.log_port_event(event="Port opened", port="COM3", details={"baud_rate": 9600})

        entry = logger.get_entries()[-1]
        assert entry.message == "Port opened"
        assert entry.port == "COM3"

    def test_get_entries_limit(self):
        logger = CommunicationLogger(enable_console=False)
        for pin in range(2, 7):
            logger.log_command(port="COM3", command=f"H{pin}")

        entries = logger.get_entries(limit=2)

        assert [entry.command for entry in entries] == ["H5", "H6"]

    def test_file_contents(self, tmp_path):
        log_file = tmp_path / "logs" / "arc.log"

        with CommunicationLogger(
            enable_file=True,
            enable_console=False,
            log_file_path=str(log_file)
        ) as logger:
            logger.log(LogEntry(
                timestamp=datetime(2025, 1, 12, 10, 30, 15),
                level="INFO",
                source="Test",
                message="hello"
            ))

        assert "hello" in log_file.read_text(encoding="utf-8")
