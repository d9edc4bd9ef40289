"""Shared fixtures: a loopback fake controller and a recording session."""

import socket
import threading

import pytest

from rnet_bridge.protocol.commands import Acknowledgment, ControllerCommand
from rnet_bridge.protocol.errors import RNetError


class FakeController:
    """Minimal TCP controller: reads one command, writes a canned reply, closes.

    ``replies`` is consumed one per connection; ``None`` means "send nothing"
    (the client will hit its read deadline).
    """

    def __init__(self, replies=None, default_reply=b"S\n\r"):
        self.replies = list(replies or [])
        self.default_reply = default_reply
        self.received: list[bytes] = []
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(8)
        self._sock.settimeout(0.2)
        self.port = self._sock.getsockname()[1]
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def start(self):
        self._thread.start()
        return self

    def stop(self):
        self._stop.set()
        self._thread.join(timeout=2)
        self._sock.close()

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            with conn:
                conn.settimeout(1.0)
                try:
                    data = conn.recv(1024)
                except OSError:
                    continue
                self.received.append(data)
                reply = self.replies.pop(0) if self.replies else self.default_reply
                if reply is None:
                    # Hold the connection open past the client's read deadline
                    self._stop.wait(1.0)
                    continue
                try:
                    conn.sendall(reply)
                except OSError:
                    pass


@pytest.fixture
def fake_controller():
    controllers = []

    def factory(replies=None, default_reply=b"S\n\r"):
        ctrl = FakeController(replies, default_reply).start()
        controllers.append(ctrl)
        return ctrl

    yield factory
    for ctrl in controllers:
        ctrl.stop()


class RecordingSession:
    """Stands in for ControllerSession; records commands, fails chosen zones."""

    def __init__(self, failures: dict[int, RNetError] | None = None):
        self.failures = failures or {}
        self.commands: list[ControllerCommand] = []

    def execute(self, command: ControllerCommand) -> Acknowledgment:
        self.commands.append(command)
        if command.zone in self.failures:
            raise self.failures[command.zone]
        return Acknowledgment(b"S\n\r")


@pytest.fixture
def recording_session():
    return RecordingSession
