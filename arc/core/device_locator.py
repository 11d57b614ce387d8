"""Relay controller discovery.

Finds the serial port of the relay controller by matching a descriptor
substring against the description of every port the host reports.
"""

from typing import Callable, List, Optional, TYPE_CHECKING

from arc.core.exceptions import DeviceNotFoundError
from arc.core.serial_handler import PortInfo, SerialHandler

if TYPE_CHECKING:
    from arc.logging.communication_logger import CommunicationLogger


PortEnumerator = Callable[[], List[PortInfo]]


class DeviceLocator:
    """Locates a serial device by description substring.

    Enumeration failures (missing subsystem, permissions) are logged and
    reported the same way as "no match".

    Example:
        >>> locator = DeviceLocator()
        >>> locator.find("Arduino")
        'COM3'
    """

    def __init__(self,
                 enumerate_ports: Optional[PortEnumerator] = None,
                 logger: Optional['CommunicationLogger'] = None):
        """Initialize locator.

        Args:
            enumerate_ports: Callable returning the host's serial ports
                (default SerialHandler.discover_ports)
            logger: Optional CommunicationLogger for discovery events
        """
        self.enumerate_ports = enumerate_ports or SerialHandler.discover_ports
        self.logger = logger

    def find_all(self, descriptor: str) -> List[PortInfo]:
        """Return every port whose description contains ``descriptor``.

        Matching is a case-sensitive substring test, in enumeration order.

        Raises:
            DeviceNotFoundError: Enumeration itself failed
        """
        try:
            ports = self.enumerate_ports()
        except Exception as e:
            # pyserial backends surface OS failures as assorted exception types
            if self.logger:
                self.logger.log_error(
                    source="DeviceLocator",
                    error=f"Port enumeration failed: {e}",
                    details={"error_type": type(e).__name__}
                )
            raise DeviceNotFoundError(descriptor, e) from e

        matches = [port for port in ports if descriptor in port.description]

        if self.logger:
            self.logger.log_discovery(
                descriptor=descriptor,
                scanned=len(ports),
                matched=[port.device for port in matches]
            )
        return matches

    def require(self, descriptor: str) -> str:
        """Return the port name of the first matching device.

        Raises:
            DeviceNotFoundError: No device matched or enumeration failed
        """
        matches = self.find_all(descriptor)
        if not matches:
            raise DeviceNotFoundError(descriptor)
        return matches[0].device

    def find(self, descriptor: str) -> Optional[str]:
        """Return the port name of the first matching device, or None.

        Args:
            descriptor: Substring expected in the port description

        Returns:
            Port device name, or None when nothing matched or enumeration failed
        """
        try:
            return self.require(descriptor)
        except DeviceNotFoundError:
            return None
