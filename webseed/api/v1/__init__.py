"""
JSON API route group.
"""
from fastapi import APIRouter, Depends

from webseed.api.deps import get_app_state, get_settings
from webseed.api.schemas import HealthResponse, InfoResponse, StatusResponse
from webseed.config import Settings
from webseed.state import AppState

API_PREFIX = "/api"


def create_api_routes() -> APIRouter:
    router = APIRouter(prefix=API_PREFIX, tags=["api"])

    @router.get("/health", response_model=HealthResponse, summary="Basic health check")
    async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
        """Basic health check endpoint for load balancers."""
        return HealthResponse(service=settings.app_name, version=settings.version, env=settings.env)

    @router.get("/status", response_model=StatusResponse, summary="Application lifecycle status")
    async def app_status(state: AppState = Depends(get_app_state)) -> StatusResponse:
        return StatusResponse(status=state.status)

    @router.get("/info", response_model=InfoResponse, summary="Runtime settings")
    async def app_info(settings: Settings = Depends(get_settings)) -> InfoResponse:
        return InfoResponse(**settings.public_view())

    return router
