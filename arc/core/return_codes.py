"""Process-level outcome codes.

One ReturnCode is produced per run and becomes the process exit status.
"""

from enum import IntEnum


class ReturnCode(IntEnum):
    """Outcome of a relay control run.

    - OK: Device acknowledged the command
    - WRONG_ARGS: Missing or extra command line arguments
    - INVALID_COMMAND: Command text failed validation
    - NOT_FOUND: No matching serial device
    - COMMUNICATION_FAIL: Open/write/read failed, timeout, fault reply,
      or unexpected reply
    """
    OK = 0
    WRONG_ARGS = 1
    INVALID_COMMAND = 2
    NOT_FOUND = 3
    COMMUNICATION_FAIL = 4

    @property
    def label(self) -> str:
        """Name printed on stdout at the end of a run.

        Example:
            >>> ReturnCode.OK.label
            'OK'
            >>> ReturnCode.NOT_FOUND.label
            'ARC_NOT_FOUND'
        """
        if self is ReturnCode.OK:
            return self.name
        return f"ARC_{self.name}"
