"""Pydantic schemas for the speaker webhook API."""

from pydantic import BaseModel, field_validator

from ..services.dispatcher import BatchResult


class SpeakerEvent(BaseModel):
    """Webhook body: {"speaker": "kitchen"}."""
    speaker: str

    @field_validator("speaker")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("missing speaker name")
        return v


class ZoneOutcomeResponse(BaseModel):
    zone: int
    command: str
    ok: bool
    error: str | None = None
    error_type: str | None = None


class BatchResponse(BaseModel):
    action: str
    speaker: str | None = None
    status: str
    zones: list[int]
    succeeded: int
    failed: int
    outcomes: list[ZoneOutcomeResponse]

    @classmethod
    def from_result(cls, result: BatchResult, speaker: str | None = None) -> "BatchResponse":
        return cls(
            action=result.action,
            speaker=speaker,
            status=result.status,
            zones=result.zones,
            succeeded=result.succeeded,
            failed=result.failed,
            outcomes=[
                ZoneOutcomeResponse(
                    zone=o.zone,
                    command=o.command,
                    ok=o.ok,
                    error=o.error,
                    error_type=o.error_type,
                )
                for o in result.outcomes
            ],
        )
