"""Cluster collaborators — the metadata, placement and read services this app consumes."""

from nsbrowse.cluster.http import MasterClient
from nsbrowse.cluster.memory import InMemoryCluster, build_demo_cluster
from nsbrowse.cluster.ports import ClusterClient, FileInStream

__all__ = [
    "ClusterClient",
    "FileInStream",
    "InMemoryCluster",
    "MasterClient",
    "build_demo_cluster",
]
