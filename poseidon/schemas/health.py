"""Health probe payload."""

from typing import Literal

from pydantic import BaseModel

DatabaseStatus = Literal["connected", "disconnected"]


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    environment: str
    database: DatabaseStatus
