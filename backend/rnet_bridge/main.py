"""FastAPI application factory and lifespan for the RNET speaker bridge."""

import html
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from starlette.responses import PlainTextResponse

from .api.router import api_router
from .config import Settings, settings
from .protocol.session import ControllerSession
from .protocol.wake import WakeTrigger
from .services.dispatcher import ZoneDispatcher
from .services.zone_directory import ZoneDirectory

# Configure logging for our app (uvicorn only configures its own loggers)
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s:     %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_dispatcher(config: Settings) -> ZoneDispatcher:
    """Wire the wake trigger and controller session from settings."""
    wake = None
    if config.wake_enabled:
        wake = WakeTrigger(
            config.broadcast_address,
            port=config.controller_port,
            source_port=config.wake_source_port,
        )
    session = ControllerSession(
        config.controller_host,
        port=config.controller_port,
        wake=wake,
        connect_timeout=config.connect_timeout,
        write_timeout=config.write_timeout,
        read_timeout=config.read_timeout,
    )
    return ZoneDispatcher(session)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: log the controller target on startup."""
    config: Settings = app.state.settings
    logger.info(
        "Controller %s:%d, wake %s, %d rooms",
        config.controller_host,
        config.controller_port,
        f"via {config.broadcast_address}" if config.wake_enabled else "disabled",
        len(app.state.directory),
    )
    logger.info("serving")
    yield
    logger.info("Application shutdown complete")


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The zone directory and dispatcher are built once here and shared
    read-only by every request through ``app.state``.
    """
    config = config or settings
    app = FastAPI(
        title="RNET Speaker Bridge",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.directory = ZoneDirectory(config.zones, max_zone=config.max_zone)
    app.state.dispatcher = build_dispatcher(config)

    # API routes
    app.include_router(api_router)

    @app.api_route(
        "/{full_path:path}",
        methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        response_class=PlainTextResponse,
    )
    async def hello(full_path: str, request: Request):
        path = html.escape(request.url.path)
        logger.info('Hello, "%s"', path)
        return f'Hello, "{path}"'

    return app


# Application instance
app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
