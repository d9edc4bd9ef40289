"""Tests for the UDP wake trigger."""

import socket

import pytest

from rnet_bridge.protocol import wake as wake_module
from rnet_bridge.protocol.constants import WAKE_PACKET_SIZE
from rnet_bridge.protocol.errors import WakeError
from rnet_bridge.protocol.wake import WakeTrigger, decode_wake_packet


@pytest.fixture
def udp_receiver():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


class TestWakePacket:
    def test_embedded_packet_decodes(self):
        payload = decode_wake_packet()
        assert len(payload) == WAKE_PACKET_SIZE
        assert payload[:6] == b"\xff" * 6

    def test_invalid_base64(self):
        with pytest.raises(WakeError):
            decode_wake_packet("not*base64!")

    def test_embedded_packet_is_144_bytes(self):
        assert WAKE_PACKET_SIZE == 144
        assert len(WakeTrigger("127.0.0.1").payload) == 144

    def test_trigger_rejects_bad_payload_at_construction(self):
        with pytest.raises(WakeError):
            WakeTrigger("127.0.0.1", payload="@@@")

    def test_trigger_rejects_wrong_length_payload(self):
        # Valid base64, but only 6 bytes
        with pytest.raises(WakeError, match="6 bytes, expected 144"):
            WakeTrigger("127.0.0.1", payload="////////")


class TestWakeSend:
    def test_sends_exact_payload_in_one_datagram(self, udp_receiver):
        port = udp_receiver.getsockname()[1]
        WakeTrigger("127.0.0.1", port=port, source_port=0).wake()
        data, _ = udp_receiver.recvfrom(2048)
        assert data == decode_wake_packet()

    def test_unresolvable_address(self):
        trigger = WakeTrigger("no-such-host.invalid", port=9, source_port=0)
        with pytest.raises(WakeError, match="cannot resolve"):
            trigger.wake()

    def test_short_write(self, monkeypatch):
        class ShortSocket:
            def __init__(self, *args, **kwargs):
                pass

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

            def setsockopt(self, *args):
                pass

            def bind(self, addr):
                pass

            def sendto(self, data, addr):
                return len(data) - 1

        monkeypatch.setattr(wake_module.socket, "socket", ShortSocket)
        with pytest.raises(WakeError, match="short udp write"):
            WakeTrigger("127.0.0.1", port=9, source_port=0).wake()

    def test_send_failure(self, monkeypatch):
        class BrokenSocket:
            def __init__(self, *args, **kwargs):
                raise PermissionError("broadcast not permitted")

        monkeypatch.setattr(wake_module.socket, "socket", BrokenSocket)
        with pytest.raises(WakeError, match="failed"):
            WakeTrigger("127.0.0.1", port=9, source_port=0).wake()
