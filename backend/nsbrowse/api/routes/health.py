"""Health check."""

from fastapi import APIRouter, Depends

from nsbrowse import __version__
from nsbrowse.api.deps import get_cluster
from nsbrowse.cluster.ports import ClusterClient
from nsbrowse.config import settings
from nsbrowse.schemas.system import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(cluster: ClusterClient = Depends(get_cluster)):
    """Liveness plus master reachability."""
    master_ok = await cluster.ping()
    return HealthResponse(
        status="ok" if master_ok else "degraded",
        version=__version__,
        mode=settings.mode,
        master_reachable=master_ok,
    )


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
