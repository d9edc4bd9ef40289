"""Exceptions raised by the RNET bridge.

Every per-zone failure derives from RNetError so the dispatcher can record
it without aborting the rest of a batch.
"""


class RNetError(Exception):
    """Base exception for bridge errors."""


class ResolutionError(RNetError):
    """Room name is missing or matches no directory entry."""


class WakeError(RNetError):
    """The wake datagram could not be built or sent."""


class TransportError(RNetError):
    """TCP connect, write, or read against the controller failed."""


class ProtocolError(RNetError):
    """The controller answered, but not with the success token."""

    def __init__(self, message: str, raw: bytes = b""):
        super().__init__(message)
        self.raw = raw

    def __str__(self) -> str:
        return f"{self.args[0]}: {list(self.raw)}"


class ConfigurationError(RNetError):
    """Zone directory or settings are invalid."""
