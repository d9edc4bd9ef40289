"""UDP broadcast wake trigger for a sleeping controller.

The controller powers its network side down when idle. Broadcasting the
vendor wake frame on the control port brings it back before a TCP session is
opened. There is no reply; the caller cannot tell whether the controller was
asleep.
"""

import base64
import binascii
import logging
import socket

from .constants import CONTROL_PORT, WAKE_PACKET_B64, WAKE_PACKET_SIZE
from .errors import WakeError

logger = logging.getLogger(__name__)


def decode_wake_packet(encoded: str = WAKE_PACKET_B64) -> bytes:
    """Decode the embedded wake frame. Raises WakeError on malformed input."""
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise WakeError(f"invalid wake payload: {e}") from e


class WakeTrigger:
    """Sends the wake frame as a single broadcast datagram."""

    def __init__(
        self,
        broadcast_address: str,
        port: int = CONTROL_PORT,
        source_port: int = CONTROL_PORT,
        payload: str = WAKE_PACKET_B64,
        expected_size: int = WAKE_PACKET_SIZE,
    ):
        self.broadcast_address = broadcast_address
        self.port = port
        self.source_port = source_port
        self.payload = decode_wake_packet(payload)
        if len(self.payload) != expected_size:
            raise WakeError(
                f"wake payload is {len(self.payload)} bytes, expected {expected_size}"
            )

    def wake(self) -> None:
        """Broadcast the wake frame. Raises WakeError on any failure."""
        try:
            addr = socket.getaddrinfo(
                self.broadcast_address, self.port, socket.AF_INET, socket.SOCK_DGRAM,
            )[0][4]
        except (socket.gaierror, IndexError) as e:
            raise WakeError(f"cannot resolve {self.broadcast_address}:{self.port}: {e}") from e

        try:
            with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
                sock.bind(("", self.source_port))
                n = sock.sendto(self.payload, addr)
        except OSError as e:
            raise WakeError(f"wake send to {addr[0]}:{addr[1]} failed: {e}") from e

        if n != len(self.payload):
            raise WakeError(f"short udp write ({n} of {len(self.payload)} bytes)")
        logger.debug("Wake frame sent to %s:%d (%d bytes)", addr[0], addr[1], n)
