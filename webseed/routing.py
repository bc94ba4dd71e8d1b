"""
Route composition: merge independently defined route groups into one table.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

from fastapi import APIRouter
from fastapi.routing import APIRoute, APIWebSocketRoute
from starlette.routing import Mount, Route, WebSocketRoute

from webseed.utils import get_logger

logger = get_logger(__name__)

RouteKey = tuple[str, str]


class RouteConflictError(ValueError):
    """Two route groups bind the same (method, path). Raised at build time."""

    def __init__(self, conflicts: Iterable[RouteKey]):
        self.conflicts = sorted(set(conflicts))
        formatted = ", ".join(f"{method} {path}" for method, path in self.conflicts)
        super().__init__(f"Conflicting route registrations: {formatted}")


class UnreadableRouteError(TypeError):
    """A route group contains an entry whose (method, path) cannot be determined."""


def _route_keys(route: Any, prefix: str = "") -> list[RouteKey]:
    if isinstance(route, (APIRoute, Route)):
        return [(method, prefix + route.path) for method in sorted(route.methods or ())]
    if isinstance(route, (APIWebSocketRoute, WebSocketRoute)):
        return [("WEBSOCKET", prefix + route.path)]
    if isinstance(route, Mount):
        nested = route.routes
        if not nested:
            return [("*", prefix + route.path)]
        return _collect(nested, prefix + route.path)
    # Routers included lazily keep the original router and the prefix they were included with.
    original = getattr(route, "original_router", None)
    if original is not None:
        return _collect(original.routes, prefix + (getattr(route, "prefix", "") or ""))
    raise UnreadableRouteError(f"Cannot determine method and path of route entry {type(route).__name__}")


def _collect(routes: Iterable[Any], prefix: str) -> list[RouteKey]:
    keys: list[RouteKey] = []
    for route in routes:
        keys.extend(_route_keys(route, prefix))
    return keys


def route_keys(router: APIRouter) -> list[RouteKey]:
    """
    Every (method, path) pair a group registers, in registration order.

    Nested routers and mounts are walked so their routes appear with the full path.

    Raises:
        UnreadableRouteError: for entries that are neither routes, mounts nor included routers
    """
    return _collect(router.routes, "")


def merge_route_groups(*routers: APIRouter) -> APIRouter:
    """
    Merge route groups into a single dispatch table.

    Conflicts are detected across all groups before anything is merged, so a
    failing merge never yields a partial table.

    Raises:
        RouteConflictError: if two registrations share a (method, path)
    """
    counts = Counter(key for router in routers for key in route_keys(router))
    conflicts = [key for key, count in counts.items() if count > 1]
    if conflicts:
        raise RouteConflictError(conflicts)

    merged = APIRouter()
    for router in routers:
        merged.include_router(router)

    logger.debug("Route groups merged", groups=len(routers), routes=len(counts))
    return merged
