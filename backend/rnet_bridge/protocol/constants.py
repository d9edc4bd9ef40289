"""Protocol constants for the RNET controller TCP/UDP interface."""

from enum import Enum

# TCP control and UDP wake share one port
CONTROL_PORT = 9621

# Only controller 1 is addressed
CONTROLLER_ID = 1

# Command terminator (newline then carriage return, in that order)
TERMINATOR = b"\n\r"

# Acknowledgment token after terminator stripping
ACK = b"S"

# Response read size
RESPONSE_BUFFER_SIZE = 1024

# Deadlines (seconds)
DEFAULT_CONNECT_TIMEOUT = 2.0
DEFAULT_WRITE_TIMEOUT = 0.1
DEFAULT_READ_TIMEOUT = 0.5

# Source index of the auxiliary input
SOURCE_AUX = "3"

# Vendor wake frame, base64-encoded. Sent verbatim; do not rebuild it.
WAKE_PACKET_B64 = (
    "////////xmENdY3mCABFAACCgcVAAEARo5IKAAAVCgAA/yWVJZUAbnZB////////ACHHAGtnACHH"
    "AGtnACHHAGtnACHHAGtnACHHAGtnACHHAGtnACHHAGtnACHHAGtnACHHAGtnACHHAGtnACHHAGtn"
    "ACHHAGtnACHHAGtnACHHAGtnACHHAGtnACHHAGtn"
)
WAKE_PACKET_SIZE = 144


class EventKind(str, Enum):
    """Event names accepted after the ``!`` in a zone command."""
    ALL_OFF = "AllOff"
    KEY_PRESS = "KeyPress"
    SELECT_SOURCE = "SelectSource"
    ZONE_OFF = "ZoneOff"


class Key(str, Enum):
    """KeyPress parameters."""
    VOLUME_UP = "VolumeUp"
    VOLUME_DOWN = "VolumeDown"
