"""Top-level API router aggregation."""

from fastapi import APIRouter

from . import speaker

api_router = APIRouter(prefix="/ifttt")

api_router.include_router(speaker.router)
