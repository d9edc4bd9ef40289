"""Speaker webhook endpoints.

POST /ifttt/speaker/on          - Select the aux source on every zone of a room
POST /ifttt/speaker/off         - Switch every zone of a room off
POST /ifttt/speaker/volume/up   - One VolumeUp key press per zone
POST /ifttt/speaker/volume/down - One VolumeDown key press per zone
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from ..protocol.errors import ResolutionError
from ..schemas.speaker import BatchResponse, SpeakerEvent
from ..services.dispatcher import Action, BatchResult, ZoneDispatcher
from ..services.zone_directory import ZoneDirectory

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/speaker")

_STATUS_CODES = {"ok": 200, "partial": 207, "failed": 502}


def get_directory(request: Request) -> ZoneDirectory:
    return request.app.state.directory


def get_dispatcher(request: Request) -> ZoneDispatcher:
    return request.app.state.dispatcher


def _render(result: BatchResult, response: Response, speaker: str | None = None) -> BatchResponse:
    response.status_code = _STATUS_CODES[result.status]
    return BatchResponse.from_result(result, speaker)


async def _dispatch(
    event: SpeakerEvent,
    action: Action,
    response: Response,
    directory: ZoneDirectory,
    dispatcher: ZoneDispatcher,
) -> BatchResponse:
    try:
        zones = directory.resolve(event.speaker)
    except ResolutionError as e:
        logger.warning("%s", e)
        raise HTTPException(status_code=404, detail=str(e))

    result = await dispatcher.async_apply(zones, action)
    return _render(result, response, event.speaker)


@router.post("/on", response_model=BatchResponse)
async def speaker_on(
    event: SpeakerEvent,
    response: Response,
    directory: ZoneDirectory = Depends(get_directory),
    dispatcher: ZoneDispatcher = Depends(get_dispatcher),
):
    """Turn a room's speakers on (switch to the aux input)."""
    return await _dispatch(event, Action.ON, response, directory, dispatcher)


@router.post("/off", response_model=BatchResponse)
async def speaker_off(
    event: SpeakerEvent,
    response: Response,
    directory: ZoneDirectory = Depends(get_directory),
    dispatcher: ZoneDispatcher = Depends(get_dispatcher),
):
    return await _dispatch(event, Action.OFF, response, directory, dispatcher)


@router.post("/volume/up", response_model=BatchResponse)
async def speaker_volume_up(
    event: SpeakerEvent,
    response: Response,
    directory: ZoneDirectory = Depends(get_directory),
    dispatcher: ZoneDispatcher = Depends(get_dispatcher),
):
    return await _dispatch(event, Action.VOLUME_UP, response, directory, dispatcher)


@router.post("/volume/down", response_model=BatchResponse)
async def speaker_volume_down(
    event: SpeakerEvent,
    response: Response,
    directory: ZoneDirectory = Depends(get_directory),
    dispatcher: ZoneDispatcher = Depends(get_dispatcher),
):
    return await _dispatch(event, Action.VOLUME_DOWN, response, directory, dispatcher)

