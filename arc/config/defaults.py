"""Default configuration values for zero-config operation."""

from arc.config.config_models import (
    Config,
    ChannelConfig,
    DeviceConfig,
    LoggingConfig,
    LogLevel
)


def get_default_config() -> Config:
    """Get default configuration.

    Returns:
        Config: Complete configuration with all defaults populated.

    Default Values:
        - Device: descriptor "Arduino", fault sentinel "FLT",
          9600 8N1 with a 1 second read timeout
        - Logging: disabled; when enabled, INFO level to file only
    """
    return Config(
        device=DeviceConfig(
            descriptor="Arduino",  # Matches "Arduino Uno (COM3)", "Arduino Mega 2560", ...
            fault_response="FLT",
            channel=ChannelConfig()
        ),
        logging=LoggingConfig(
            enabled=False,
            level=LogLevel.INFO,
            log_to_file=True,
            log_to_console=False,
            log_file_path=None,  # Auto-generated: ~/.arc/logs/arc_{timestamp}.log
            max_file_size_mb=10,
            backup_count=5
        )
    )
