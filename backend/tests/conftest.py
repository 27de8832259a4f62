from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from docwrapper.core.pool import PoolManager
from docwrapper.main import create_app
from tests.utils.fake_mongo import FakeClient, FakeClientFactory, FakeCollection


@pytest.fixture
def collection() -> FakeCollection:
    return FakeCollection([{"_id": 1, "name": "alpha", "tags": ["a", "b"]}])


@pytest.fixture
def fake_client(collection: FakeCollection) -> FakeClient:
    return FakeClient(collection)


@pytest.fixture
def pool_manager(fake_client: FakeClient) -> PoolManager:
    return PoolManager(
        "mongodb://mongodb-test:27017",
        database="demo",
        collection="test",
        max_pool_size=10,
        connect_timeout=1.0,
        client_factory=FakeClientFactory(fake_client),
    )


@pytest.fixture
def client(pool_manager: PoolManager) -> Generator[TestClient, None, None]:
    with TestClient(create_app(pool_manager)) as c:
        yield c
