"""Test fixtures — in-memory cluster and FastAPI test client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from nsbrowse.api.deps import get_cluster
from nsbrowse.cluster.memory import InMemoryCluster
from nsbrowse.cluster.models import WorkerNetAddress
from nsbrowse.main import create_app

WORKER_1 = WorkerNetAddress(host="worker-1", data_port=29999)
WORKER_2 = WorkerNetAddress(host="worker-2", data_port=29999)
UFS = WorkerNetAddress(host="ufs", data_port=9000)


@pytest.fixture
def cluster():
    """Empty namespace with only the root directory."""
    return InMemoryCluster(master_address="master:19998")


@pytest.fixture
def populated(cluster):
    """Namespace with a 10000-byte file and a directory of five files."""
    cluster.add_file("/a.txt", bytes(i % 251 for i in range(10000)), workers=[WORKER_1], ufs_locations=[UFS])
    for name in ("e", "c", "a", "d", "b"):
        cluster.add_file(f"/dir/{name}.log", name.encode() * 10, workers=[WORKER_1, WORKER_2])
    return cluster


@pytest_asyncio.fixture
async def client(cluster):
    """Async test client with the cluster dependency overridden."""
    app = create_app()
    app.dependency_overrides[get_cluster] = lambda: cluster

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
