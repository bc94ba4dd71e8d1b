"""
Response schemas for the JSON API group.
"""
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from webseed.state import AppStatus


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str
    version: str
    env: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class StatusResponse(BaseModel):
    status: AppStatus


class InfoResponse(BaseModel):
    """Resolved runtime settings, as seen by the running process."""
    app_name: str
    version: str
    env: str
    group: str
    host: str
    app_root: str
    user: str
    data_centre: str
    zone: str
    country: str
    dns_alias: str
    local_mode: bool
    port: int
