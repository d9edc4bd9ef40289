"""TCP session with the RNET controller.

One session serves exactly one command: wake, connect, write, read, close.
Sessions are never pooled or reused, so a ControllerSession instance holds
only immutable connection parameters and is safe to share between threads.
"""

import asyncio
import logging
import socket
from enum import Enum
from typing import Optional

from .commands import Acknowledgment, ControllerCommand, parse_acknowledgment
from .constants import (
    CONTROL_PORT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_WRITE_TIMEOUT,
    RESPONSE_BUFFER_SIZE,
)
from .errors import TransportError
from .wake import WakeTrigger

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    WAKE_SENT = "wake_sent"
    CONNECTED = "connected"
    COMMAND_SENT = "command_sent"
    RESPONSE_RECEIVED = "response_received"
    CLOSED = "closed"


class ControllerSession:
    """Runs single commands against the controller's TCP control port."""

    def __init__(
        self,
        host: str,
        port: int = CONTROL_PORT,
        wake: Optional[WakeTrigger] = None,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        write_timeout: float = DEFAULT_WRITE_TIMEOUT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
    ):
        self.host = host
        self.port = port
        self.wake = wake
        self.connect_timeout = connect_timeout
        self.write_timeout = write_timeout
        self.read_timeout = read_timeout

    def execute(self, command: ControllerCommand) -> Acknowledgment:
        """Send one command and validate the acknowledgment.

        Raises WakeError before any connection attempt if the wake broadcast
        fails, TransportError on connect/write/read failure (including a
        short write or a timeout), and ProtocolError when the controller
        answers with anything other than the success token. The socket is
        closed on every path.
        """
        logger.info("running '%s'", command.text)
        state = SessionState.IDLE

        if self.wake is not None:
            self.wake.wake()
            state = self._transition(state, SessionState.WAKE_SENT)

        sock = self._connect()
        state = self._transition(state, SessionState.CONNECTED)
        try:
            self._write(sock, command.to_bytes())
            state = self._transition(state, SessionState.COMMAND_SENT)
            raw = self._read(sock)
            state = self._transition(state, SessionState.RESPONSE_RECEIVED)
            return parse_acknowledgment(raw)
        finally:
            sock.close()
            self._transition(state, SessionState.CLOSED)

    async def async_execute(self, command: ControllerCommand) -> Acknowledgment:
        """Async version of execute."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.execute, command)

    def _connect(self) -> socket.socket:
        try:
            sock = socket.create_connection(
                (self.host, self.port), timeout=self.connect_timeout,
            )
        except socket.timeout as e:
            raise TransportError(
                f"connect to {self.host}:{self.port} timed out after {self.connect_timeout}s"
            ) from e
        except OSError as e:
            raise TransportError(f"connect to {self.host}:{self.port} failed: {e}") from e
        logger.debug("connected to %s:%d", self.host, self.port)
        return sock

    def _write(self, sock: socket.socket, data: bytes) -> None:
        try:
            sock.settimeout(self.write_timeout)
            n = sock.send(data)
        except OSError as e:
            raise TransportError(f"write failed: {e}") from e
        if n != len(data):
            raise TransportError(f"short write ({n} of {len(data)} bytes)")
        logger.debug("TX: %s", data.hex())

    def _read(self, sock: socket.socket) -> bytes:
        try:
            sock.settimeout(self.read_timeout)
            data = sock.recv(RESPONSE_BUFFER_SIZE)
        except socket.timeout as e:
            raise TransportError(f"no response within {self.read_timeout}s") from e
        except OSError as e:
            raise TransportError(f"read failed: {e}") from e
        logger.debug("RX: %s", data.hex())
        return data

    def _transition(self, old: SessionState, new: SessionState) -> SessionState:
        logger.debug("session %s -> %s", old.value, new.value)
        return new
