"""
Route groups composed by the application builder.
"""
from .assets import create_asset_routes
from .pages import create_page_routes
from .v1 import create_api_routes

__all__ = ["create_asset_routes", "create_api_routes", "create_page_routes"]
