"""File handler for logging with size-based rotation."""

from pathlib import Path
from typing import Optional, TextIO
import os
import sys

from arc.logging.log_models import LogEntry


class FileHandler:
    """File writer with automatic log rotation.

    Appends one formatted line per entry. When the file exceeds the maximum
    size it is renamed to ``.1`` (older backups shift up) and a fresh file
    is started.

    Example:
        >>> handler = FileHandler("~/.arc/logs/arc.log", max_size_mb=10, backup_count=5)
        >>> handler.write(log_entry)
        >>> handler.close()
    """

    def __init__(self, log_file_path: str, max_size_mb: int = 10, backup_count: int = 5):
        """Initialize FileHandler with path and rotation settings.

        Creates the log directory if it doesn't exist.

        Args:
            log_file_path: Path to log file (supports ~ expansion)
            max_size_mb: Maximum file size in MB before rotation (default: 10)
            backup_count: Number of rotated backups to keep (default: 5)

        Raises:
            OSError: If log directory cannot be created
        """
        self.log_file_path = Path(log_file_path).expanduser().resolve()
        self.max_size_bytes = max_size_mb * 1024 * 1024
        self.backup_count = backup_count
        self._file_handle: Optional[TextIO] = None
        self._is_closed = False

        self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
        self._open_file()

    def _open_file(self) -> None:
        try:
            self._file_handle = open(self.log_file_path, mode='a', encoding='utf-8')
        except OSError as e:
            print(f"ERROR: Failed to open log file {self.log_file_path}: {e}", file=sys.stderr)
            self._file_handle = None

    def write(self, entry: LogEntry) -> bool:
        """Write log entry to file, rotating first if needed.

        Args:
            entry: LogEntry to write to file

        Returns:
            True if write successful, False if write failed
        """
        if self._is_closed or self._file_handle is None:
            return False

        try:
            self._rotate_if_needed()
            if self._file_handle is None:
                return False
            self._file_handle.write(entry.to_string() + '\n')
            self._file_handle.flush()
            return True
        except OSError as e:
            print(f"ERROR: Failed to write log entry: {e}", file=sys.stderr)
            return False

    def _rotate_if_needed(self) -> None:
        """Rotate the log file when it exceeds the maximum size.

        ``arc.log`` becomes ``arc.log.1``, ``arc.log.1`` becomes
        ``arc.log.2`` and so on; anything beyond backup_count is deleted.
        """
        if self._file_handle is None:
            return

        try:
            if os.path.getsize(self.log_file_path) < self.max_size_bytes:
                return

            self._file_handle.close()

            for i in range(self.backup_count - 1, 0, -1):
                src = Path(f"{self.log_file_path}.{i}")
                dst = Path(f"{self.log_file_path}.{i + 1}")
                if src.exists():
                    if dst.exists():
                        dst.unlink()
                    src.rename(dst)

            backup_path = Path(f"{self.log_file_path}.1")
            if backup_path.exists():
                backup_path.unlink()
            self.log_file_path.rename(backup_path)

            self._open_file()

        except OSError as e:
            print(f"WARNING: Log rotation failed: {e}", file=sys.stderr)
            if self._file_handle is None or self._file_handle.closed:
                self._open_file()

    def flush(self) -> None:
        """Flush buffered writes to disk."""
        if self._file_handle is None or self._is_closed:
            return

        try:
            self._file_handle.flush()
            os.fsync(self._file_handle.fileno())
        except OSError as e:
            print(f"ERROR: Failed to flush log file: {e}", file=sys.stderr)

    def close(self) -> None:
        """Close log file. Idempotent."""
        if self._is_closed:
            return

        try:
            if self._file_handle and not self._file_handle.closed:
                self._file_handle.flush()
                self._file_handle.close()
        except OSError as e:
            print(f"ERROR: Failed to close log file: {e}", file=sys.stderr)
        finally:
            self._file_handle = None
            self._is_closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
