"""FastAPI dependency injection — cluster handle and browse service."""

from __future__ import annotations

from fastapi import Depends

from nsbrowse.browse.service import BrowseService
from nsbrowse.cluster.ports import ClusterClient
from nsbrowse.config import settings
from nsbrowse.services import get_cluster_client


def get_cluster() -> ClusterClient:
    """The shared cluster client; overridden with an in-memory cluster in tests."""
    return get_cluster_client()


def get_browse_service(cluster: ClusterClient = Depends(get_cluster)) -> BrowseService:
    """A fresh browse service per request around the shared handle."""
    return BrowseService.from_settings(cluster, settings)
