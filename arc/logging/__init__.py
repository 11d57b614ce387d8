"""Communication logging module.

Records serial traffic and discovery events between the relay tool and
the controller board for troubleshooting.
"""

from arc.logging.log_models import LogEntry
from arc.logging.file_handler import FileHandler
from arc.logging.communication_logger import CommunicationLogger

__all__ = ['LogEntry', 'FileHandler', 'CommunicationLogger']
