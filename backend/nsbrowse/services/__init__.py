"""Long-lived handles — singleton registry."""

from __future__ import annotations

import logging

from nsbrowse.cluster.ports import ClusterClient
from nsbrowse.config import Settings, settings

logger = logging.getLogger(__name__)

_cluster_client: ClusterClient | None = None


def build_cluster_client(cfg: Settings) -> ClusterClient:
    """In-memory demo namespace in dev mode, the remote master otherwise."""
    if cfg.is_dev_mode:
        from nsbrowse.cluster.memory import build_demo_cluster

        return build_demo_cluster(master_address=cfg.master_address)

    from nsbrowse.cluster.http import MasterClient

    return MasterClient(
        base_url=cfg.master_url,
        master_address=cfg.master_address,
        timeout=cfg.master_timeout_seconds,
    )


async def init_services() -> None:
    """Create the cluster client shared by all requests."""
    global _cluster_client
    _cluster_client = build_cluster_client(settings)
    logger.info(
        "Cluster client initialized (%s mode, master %s)",
        settings.mode,
        _cluster_client.master_address,
    )


async def shutdown_services() -> None:
    global _cluster_client
    if _cluster_client:
        await _cluster_client.close()
        _cluster_client = None


def get_cluster_client() -> ClusterClient:
    if _cluster_client is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _cluster_client
