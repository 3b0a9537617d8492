"""System status schemas."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    service: str = "nsbrowse"
    mode: str = "dev"
    master_reachable: bool = True
