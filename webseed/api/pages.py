"""
Server-rendered page routes.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from webseed.api.deps import get_app_state, get_settings, get_templates
from webseed.config import Settings
from webseed.state import AppState
from webseed.templating import render_page

EXAMPLE_ERROR_MESSAGE = "This is an example error page rendered by the server."


def create_page_routes() -> APIRouter:
    router = APIRouter(tags=["pages"], default_response_class=HTMLResponse)

    @router.get("/", summary="Home page")
    async def handle_homepage(
        request: Request,
        templates: Jinja2Templates = Depends(get_templates),
        settings: Settings = Depends(get_settings),
        state: AppState = Depends(get_app_state),
    ) -> HTMLResponse:
        return render_page(
            templates, request, "homepage.html",
            settings=settings, status=state.status.value,
        )

    @router.get("/charts", summary="Charts page")
    async def handle_charts(
        request: Request,
        templates: Jinja2Templates = Depends(get_templates),
        settings: Settings = Depends(get_settings),
    ) -> HTMLResponse:
        return render_page(templates, request, "chartjs.html", settings=settings)

    @router.get("/error", summary="Example error page")
    async def handle_error_page(
        request: Request,
        templates: Jinja2Templates = Depends(get_templates),
        settings: Settings = Depends(get_settings),
    ) -> HTMLResponse:
        return render_page(
            templates, request, "error.html", status_code=500,
            settings=settings, code=500, error=EXAMPLE_ERROR_MESSAGE,
        )

    return router
