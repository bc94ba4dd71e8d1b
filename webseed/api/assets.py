"""
Static asset routes backed by files packaged with webseed.
"""
from __future__ import annotations

import mimetypes
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import Response

ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"


def read_asset(relative_path: str, root: Path = ASSETS_DIR) -> bytes:
    """Return the bytes of a packaged asset.

    Raises:
        FileNotFoundError: if the path is missing, not a valid path, a directory or outside ``root``
    """
    root = root.resolve()
    try:
        candidate = (root / relative_path).resolve()
    except ValueError as exc:
        raise FileNotFoundError(f"Asset not found: {relative_path!r}") from exc
    if not candidate.is_relative_to(root) or not candidate.is_file():
        raise FileNotFoundError(f"Asset not found: {relative_path}")
    return candidate.read_bytes()


def create_asset_routes(root: Path = ASSETS_DIR) -> APIRouter:
    router = APIRouter(tags=["assets"])

    @router.get("/assets/{asset_path:path}", summary="Packaged static asset")
    def handle_asset(asset_path: str) -> Response:
        body = read_asset(asset_path, root)
        media_type = mimetypes.guess_type(asset_path)[0] or "application/octet-stream"
        return Response(content=body, media_type=media_type)

    return router
