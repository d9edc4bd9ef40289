"""Fan a speaker action out to every zone of a room.

Zones run one after another in ascending order, each with its own controller
session. A failure on one zone is logged and recorded; the remaining zones
still run. Nothing is retried.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from ..protocol.commands import (
    ControllerCommand,
    build_all_off_command,
    build_key_press_command,
    build_select_source_command,
    build_zone_off_command,
)
from ..protocol.constants import Key
from ..protocol.errors import RNetError
from ..protocol.session import ControllerSession

logger = logging.getLogger(__name__)


class Action(str, Enum):
    ON = "on"
    OFF = "off"
    VOLUME_UP = "volume-up"
    VOLUME_DOWN = "volume-down"


# Past-tense phrasing for the per-zone log line
_ACTION_LOG = {
    Action.ON: "turned on",
    Action.OFF: "turned off",
    Action.VOLUME_UP: "volume up on",
    Action.VOLUME_DOWN: "volume down on",
}


def command_for(action: Action, zone: int) -> ControllerCommand:
    """Map a public action to the controller command for one zone."""
    action = Action(action)
    if action is Action.ON:
        return build_select_source_command(zone)
    if action is Action.OFF:
        return build_zone_off_command(zone)
    if action is Action.VOLUME_UP:
        return build_key_press_command(zone, Key.VOLUME_UP)
    return build_key_press_command(zone, Key.VOLUME_DOWN)


@dataclass(frozen=True)
class ZoneOutcome:
    """Result of one zone's command."""
    zone: int
    command: str
    ok: bool
    error: Optional[str] = None
    error_type: Optional[str] = None


@dataclass(frozen=True)
class BatchResult:
    """Ordered per-zone outcomes of one dispatched action."""
    action: str
    outcomes: tuple[ZoneOutcome, ...]

    @property
    def zones(self) -> list[int]:
        return [o.zone for o in self.outcomes]

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.succeeded

    @property
    def status(self) -> str:
        """ok when every zone succeeded, failed when none did, else partial."""
        if self.failed == 0:
            return "ok"
        if self.succeeded == 0:
            return "failed"
        return "partial"


class ZoneDispatcher:
    """Issues one controller command per zone, best effort."""

    def __init__(self, session: ControllerSession):
        self.session = session

    def apply(self, zones: Iterable[int], action: Action) -> BatchResult:
        action = Action(action)
        outcomes = []
        for zone in sorted(set(zones)):
            command = command_for(action, zone)
            outcome = self._run(command)
            if outcome.ok:
                logger.info("%s zone %d", _ACTION_LOG[action], zone)
            else:
                logger.warning("error on zone %d (%s): %s", zone, action.value, outcome.error)
            outcomes.append(outcome)

        result = BatchResult(action.value, tuple(outcomes))
        logger.info(
            "%s: %d/%d zones succeeded", action.value, result.succeeded, len(outcomes),
        )
        return result

    def all_off(self) -> BatchResult:
        """Switch every zone off with a single controller-wide command."""
        outcome = self._run(build_all_off_command())
        if outcome.ok:
            logger.info("all zones off")
        else:
            logger.warning("all off failed: %s", outcome.error)
        return BatchResult("all-off", (outcome,))

    async def async_apply(self, zones: Iterable[int], action: Action) -> BatchResult:
        """Async version of apply."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.apply, tuple(zones), action)

    def _run(self, command: ControllerCommand) -> ZoneOutcome:
        try:
            self.session.execute(command)
        except RNetError as e:
            return ZoneOutcome(
                command.zone, command.text, False, str(e), type(e).__name__,
            )
        return ZoneOutcome(command.zone, command.text, True)
