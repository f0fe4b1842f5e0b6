"""Health check payload."""

from typing import Literal

from pydantic import Field

from todo_api.schemas.base import CamelModel


class HealthResponse(CamelModel):
    """Liveness plus database reachability; `degraded` when the database is down."""

    status: Literal["ok", "degraded"]
    version: str
    environment: str = Field(description="APP_ENV of the running process")
    database: Literal["connected", "disconnected"]
