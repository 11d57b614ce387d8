"""JSON Schema validation for Arduino Relay Control configuration.

Serial line parameters are deliberately absent from the schema: they are
fixed by the board firmware and a config file that sets them is rejected.
"""

from typing import List, Tuple, Dict, Any

from jsonschema import Draft7Validator


class ConfigSchema:
    """Configuration schema validator using JSON Schema Draft 7.

    Example:
        >>> is_valid, errors = ConfigSchema.validate_config(config_dict)
        >>> if not is_valid:
        ...     for error in errors:
        ...         print(error)
    """

    @staticmethod
    def get_schema() -> Dict[str, Any]:
        """Get JSON Schema Draft 7 for configuration validation.

        Returns:
            JSON Schema dictionary defining the ``device`` and ``logging``
            sections.
        """
        return {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "title": "Arduino Relay Control Configuration",
            "type": "object",
            "properties": {
                "device": {
                    "type": "object",
                    "description": "Relay controller identification",
                    "properties": {
                        "descriptor": {
                            "type": "string",
                            "description": "Substring expected in the serial port description",
                            "minLength": 1
                        },
                        "fault_response": {
                            "type": "string",
                            "description": "Reply the controller sends when it rejects a command",
                            "minLength": 1
                        }
                    },
                    "additionalProperties": False
                },
                "logging": {
                    "type": "object",
                    "description": "Communication logging",
                    "properties": {
                        "enabled": {"type": "boolean"},
                        "level": {
                            "type": "string",
                            "enum": ["DEBUG", "INFO", "WARNING", "ERROR"]
                        },
                        "log_to_file": {"type": "boolean"},
                        "log_to_console": {"type": "boolean"},
                        "log_file_path": {"type": ["string", "null"]},
                        "max_file_size_mb": {
                            "type": "integer",
                            "minimum": 1,
                            "maximum": 1000
                        },
                        "backup_count": {
                            "type": "integer",
                            "minimum": 0,
                            "maximum": 100
                        }
                    },
                    "additionalProperties": False
                }
            },
            "additionalProperties": False
        }

    @staticmethod
    def validate_config(config_dict: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """Validate configuration dictionary against the schema.

        Args:
            config_dict: Merged configuration dictionary

        Returns:
            Tuple of (is_valid, error messages). Each message is prefixed
            with the dotted path of the offending key.
        """
        validator = Draft7Validator(ConfigSchema.get_schema())
        errors = []

        for error in sorted(validator.iter_errors(config_dict), key=lambda e: list(e.path)):
            path = ".".join(str(p) for p in error.path) or "<root>"
            errors.append(f"{path}: {error.message}")

        return len(errors) == 0, errors
