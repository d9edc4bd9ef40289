"""Room name to amplifier zone lookup.

A room name resolves through the entries whose key appears as a substring of
the (lower-cased, trimmed) name. When several keys match, the longest key
wins, so "living area" beats "living" and "all" only wins when nothing more
specific matches. Equal-length ties go to the entry declared first.

Matching ignores case and surrounding whitespace: "KITCHEN" resolves like
"kitchen". A name with no key in it under that folding still raises
ResolutionError.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from ..protocol.errors import ConfigurationError, ResolutionError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ZONE = 6

DEFAULT_ZONES: dict[str, list[int]] = {
    "all": [1, 2, 3, 4, 5, 6],
    "living area": [3, 4],
    "bedroom": [1],
    "bathroom": [2],
    "family room": [3],
    "living room": [3],
    "kitchen": [4],
    "study": [5],
    "office": [5],
    "porch": [6],
}


@dataclass(frozen=True)
class ZoneEntry:
    """A room-name key and the zones it controls."""
    key: str
    zones: tuple[int, ...]


class ZoneDirectory:
    """Immutable room-name directory, built once at startup."""

    def __init__(self, entries: Mapping[str, Iterable[int]], max_zone: int = DEFAULT_MAX_ZONE):
        built = []
        for key, zones in entries.items():
            norm = key.strip().lower()
            if not norm:
                raise ConfigurationError("zone directory key must not be empty")
            zone_set = tuple(sorted(set(zones)))
            if not zone_set:
                raise ConfigurationError(f"room '{key}' has no zones")
            for z in zone_set:
                if isinstance(z, bool) or not isinstance(z, int) or not 1 <= z <= max_zone:
                    raise ConfigurationError(
                        f"room '{key}' has zone {z!r} outside 1..{max_zone}"
                    )
            built.append(ZoneEntry(norm, zone_set))
        self._entries = tuple(built)
        self.max_zone = max_zone

    @classmethod
    def default(cls) -> "ZoneDirectory":
        return cls(DEFAULT_ZONES)

    @property
    def entries(self) -> tuple[ZoneEntry, ...]:
        return self._entries

    def resolve(self, room_name: str | None) -> tuple[int, ...]:
        """Return the ascending zone tuple for a room name.

        Raises ResolutionError for a missing/blank name or when no key is a
        substring of it.
        """
        if room_name is None or not room_name.strip():
            raise ResolutionError("missing speaker name")
        target = room_name.strip().lower()

        best: ZoneEntry | None = None
        for entry in self._entries:
            if entry.key in target and (best is None or len(entry.key) > len(best.key)):
                best = entry

        if best is None:
            raise ResolutionError(f"unknown speaker name: {room_name}")
        logger.debug("Resolved '%s' via '%s' to zones %s", room_name, best.key, best.zones)
        return best.zones

    def __len__(self) -> int:
        return len(self._entries)
