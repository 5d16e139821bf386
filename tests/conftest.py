import pytest

from depthchart.persistence import MemorySnapshotStore


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def storage() -> MemorySnapshotStore:
    return MemorySnapshotStore()
