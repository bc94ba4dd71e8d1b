"""
Application bootstrap: builder, single-use application and process entrypoint.
"""
from __future__ import annotations

import logging
import socket
import threading
import time
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from typing import Optional

import uvicorn
from fastapi import APIRouter, FastAPI, Request

from webseed import __version__
from webseed.api import create_api_routes, create_asset_routes, create_page_routes
from webseed.config import BIND_HOST, Settings
from webseed.errors import register_error_handlers
from webseed.routing import merge_route_groups
from webseed.state import AppState, AppStatus
from webseed.templating import create_templates
from webseed.utils import get_logger, setup_logging

logger = get_logger(__name__)


class ApplicationAlreadyStarted(RuntimeError):
    pass


def default_route_groups() -> tuple[APIRouter, ...]:
    return (create_page_routes(), create_api_routes(), create_asset_routes())


@asynccontextmanager
async def lifespan(api: FastAPI):
    """Move the shared state to RUNNING once the serve loop has started up."""
    state: AppState = api.state.app_state
    if state.status is AppStatus.STARTED:
        state.advance(AppStatus.RUNNING)
    logger.info("Application startup completed", status=state.status.value)
    yield
    logger.info("Application shutdown completed", status=state.status.value)


async def add_request_context_and_logging(request: Request, call_next):
    """
    Add request ID, timing, and request/response logging.
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    start_time = time.perf_counter()

    logger.debug(
        "Request started",
        method=request.method,
        url=str(request.url),
        remote_addr=request.client.host if request.client else "unknown",
        request_id=request_id,
    )

    response = await call_next(request)

    process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time"] = str(process_time_ms)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"

    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
        process_time_ms=process_time_ms,
        request_id=request_id,
    )
    return response


class Application:
    """
    Owns the composed FastAPI app and runs the serve loop.

    ``start`` may be called once per instance; the listening socket is bound
    exactly once for the lifetime of the object.
    """

    def __init__(self, api: FastAPI, settings: Settings, state: AppState):
        self.api = api
        self.settings = settings
        self.state = state
        self._started = False
        self._start_lock = threading.Lock()
        self._server: Optional[uvicorn.Server] = None

    def _claim_start(self) -> None:
        with self._start_lock:
            if self._started:
                raise ApplicationAlreadyStarted("Application.start() may only be called once")
            self._started = True

    def _bind(self) -> socket.socket:
        return socket.create_server((BIND_HOST, self.settings.port), backlog=2048)

    def _server_config(self) -> uvicorn.Config:
        return uvicorn.Config(
            self.api,
            log_config=None,
            log_level=uvicorn_log_level(self.settings.log_level),
            access_log=False,
        )

    def _fail(self, message: str, **context) -> SystemExit:
        self.state.advance(AppStatus.ERROR)
        logger.error(message, **context)
        return SystemExit(message + ": " + ", ".join(f"{k}={v}" for k, v in context.items()))

    def start(self) -> None:
        """
        Bind ``0.0.0.0:<port>`` and serve until the process is signalled.

        Startup failures are fatal: the state moves to ERROR and the process
        exits with a diagnostic via ``SystemExit``. A state that is already
        STARTED or RUNNING is left as is; ERROR stays ERROR.

        Raises:
            ApplicationAlreadyStarted: on a second call
            SystemExit: if the server cannot be configured, bound or started
        """
        self._claim_start()
        address = self.settings.bind_address
        try:
            config = self._server_config()
        except ValueError as exc:
            raise self._fail("Invalid server configuration", address=address, error=str(exc)) from exc

        try:
            sock = self._bind()
        except OSError as exc:
            raise self._fail("Unable to bind listener", address=address, error=str(exc)) from exc

        try:
            self.state.advance(AppStatus.STARTED)
            logger.info(f"Server started at {address}", version=self.settings.version, env=self.settings.env)
            self._server = uvicorn.Server(config)
            self._server.run(sockets=[sock])
        finally:
            sock.close()

        if not self._server.started:
            raise self._fail("Server failed during startup", address=address)


def uvicorn_log_level(name: str) -> int:
    """Numeric level for a stdlib level name (WARN and FATAL included)."""
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {name!r}")
    return level


@dataclass(frozen=True)
class AppBuilder:
    """
    Value-semantics builder: every ``with_*`` call returns a new builder.

    Without ``with_state`` each ``build()`` gets its own NOT_STARTED state.
    """

    settings: Settings = field(default_factory=Settings)
    state: Optional[AppState] = None
    route_groups: tuple[APIRouter, ...] = field(default_factory=default_route_groups)

    def with_state(self, state: AppState) -> AppBuilder:
        return replace(self, state=state)

    def with_settings(self, settings: Settings) -> AppBuilder:
        return replace(self, settings=settings)

    def with_route_group(self, router: APIRouter) -> AppBuilder:
        return replace(self, route_groups=(*self.route_groups, router))

    def build(self) -> Application:
        """
        Compose every route group into one FastAPI app.

        Raises:
            RouteConflictError: if two groups register the same method and path
            UnreadableRouteError: if a group holds an entry with no readable method and path
        """
        routes = merge_route_groups(*self.route_groups)
        state = self.state if self.state is not None else AppState()

        api = FastAPI(
            title=self.settings.app_name,
            version=self.settings.version,
            docs_url="/docs" if self.settings.is_local_mode else None,
            redoc_url=None,
            lifespan=lifespan,
        )
        api.state.app_state = state
        api.state.settings = self.settings
        api.state.templates = create_templates()

        api.middleware("http")(add_request_context_and_logging)
        register_error_handlers(api)
        api.include_router(routes)

        logger.info("Application built", routes=len(routes.routes), status=state.status.value)
        return Application(api, self.settings, state)


def main() -> None:
    settings = Settings.from_env()
    setup_logging(log_level=settings.log_level, log_file=settings.log_file)
    logger.info("Starting application entrypoint", version=__version__, env=settings.env)
    AppBuilder().with_settings(settings).build().start()


if __name__ == "__main__":
    main()
