"""
Dependencies exposing the shared application objects to handlers.
"""
from fastapi import Request
from fastapi.templating import Jinja2Templates

from webseed.config import Settings
from webseed.state import AppState


def get_app_state(request: Request) -> AppState:
    """Shared application state attached by the builder."""
    return request.app.state.app_state


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates

