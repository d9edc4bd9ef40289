"""Command builders and acknowledgment parsing for the RNET control protocol.

All commands are ASCII lines of the form

    event c[1].z[<zone>]!<EventKind>[ <parameter>]

terminated with LF CR (0x0A 0x0D). The controller answers each command with
a single ``S`` on success, followed by the same two-byte terminator.
"""

from dataclasses import dataclass
from typing import Optional

from .constants import (
    ACK,
    CONTROLLER_ID,
    SOURCE_AUX,
    TERMINATOR,
    EventKind,
    Key,
)
from .errors import ProtocolError

# Either terminator order is stripped from responses
_RESPONSE_TERMINATORS = (TERMINATOR, TERMINATOR[::-1])


@dataclass(frozen=True)
class ControllerCommand:
    """One event addressed to one zone."""
    zone: int
    event: EventKind
    parameter: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.zone, bool) or not isinstance(self.zone, int) or self.zone < 1:
            raise ValueError(f"zone must be a positive integer, got {self.zone!r}")
        if self.parameter is not None and any(c in self.parameter for c in "\r\n"):
            raise ValueError("parameter must not contain line breaks")

    @property
    def text(self) -> str:
        """Command line without the terminator (used for logging)."""
        cmd = f"event c[{CONTROLLER_ID}].z[{self.zone}]!{self.event.value}"
        if self.parameter:
            cmd += " " + self.parameter
        return cmd

    def to_bytes(self) -> bytes:
        """Convert command to wire format."""
        return self.text.encode("ascii") + TERMINATOR


@dataclass(frozen=True)
class Acknowledgment:
    """A validated success response."""
    raw: bytes

    @property
    def token(self) -> bytes:
        return strip_terminator(self.raw)


def build_select_source_command(zone: int, source: str = SOURCE_AUX) -> ControllerCommand:
    """Switch a zone to a source (powers the zone on). Aux input is source 3."""
    return ControllerCommand(zone, EventKind.SELECT_SOURCE, source)


def build_key_press_command(zone: int, key: Key) -> ControllerCommand:
    """Emulate a keypad press, e.g. VolumeUp."""
    return ControllerCommand(zone, EventKind.KEY_PRESS, Key(key).value)


def build_zone_off_command(zone: int) -> ControllerCommand:
    return ControllerCommand(zone, EventKind.ZONE_OFF)


def build_all_off_command() -> ControllerCommand:
    """AllOff is controller-wide; it is addressed to zone 1."""
    return ControllerCommand(1, EventKind.ALL_OFF)


def strip_terminator(raw: bytes) -> bytes:
    """Remove a trailing two-byte line terminator, if present."""
    for term in _RESPONSE_TERMINATORS:
        if raw.endswith(term):
            return raw[: -len(term)]
    return raw


def parse_acknowledgment(raw: bytes) -> Acknowledgment:
    """Validate a controller response.

    The response must be exactly ``S`` followed by the line terminator.
    Empty, unterminated, or any other content raises ProtocolError with the
    raw bytes attached.
    """
    if not raw:
        raise ProtocolError("empty response", raw)
    if not raw.endswith(_RESPONSE_TERMINATORS):
        raise ProtocolError("unterminated response", raw)
    if strip_terminator(raw) != ACK:
        raise ProtocolError("unexpected response", raw)
    return Acknowledgment(raw)
