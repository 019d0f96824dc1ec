"""
Concurrency tests for the shared, lock-guarded store handle.
"""

import asyncio

import httpx
import pytest

from model_store_api.app.core.config import Settings
from model_store_api.app.main import create_app
from model_store_api.app.services.model_store import MemoryModelStore, SharedModelStore


class SlowMemoryStore(MemoryModelStore):
    """Memory store whose add suspends between inserting and finishing."""

    def __init__(self):
        super().__init__()
        self.completed = set()

    async def add(self, name, version, data):
        model = await super().add(name, version, data)
        await asyncio.sleep(0.005)
        self.completed.add(model.id)
        return model


class TestConcurrentAccess:
    @pytest.mark.asyncio
    async def test_concurrent_creates_are_not_lost(self, store):
        """Test that concurrent writers each produce a distinct record"""
        shared = SharedModelStore(store)

        async def create(i):
            async with shared.write() as s:
                return await s.add(f"m{i}", "v1", f"payload-{i}")

        created = await asyncio.gather(*(create(i) for i in range(50)))

        async with shared.read() as s:
            listed = await s.list_models()
        assert len({m.id for m in created}) == 50
        assert {m.id for m in listed} == {m.id for m in created}
        assert {m.data for m in listed} == {f"payload-{i}" for i in range(50)}

    @pytest.mark.asyncio
    async def test_readers_never_see_unfinished_writes(self):
        """Test that a list during a create sees the record fully or not at all"""
        store = SlowMemoryStore()
        shared = SharedModelStore(store)
        observed = []

        async def create(i):
            async with shared.write() as s:
                await s.add(f"m{i}", "v1", "x")

        async def read():
            for _ in range(20):
                async with shared.read() as s:
                    models = await s.list_models()
                    observed.append(all(m.id in store.completed for m in models))
                await asyncio.sleep(0.001)

        await asyncio.gather(read(), *(create(i) for i in range(10)), read())

        assert observed
        assert all(observed)

    @pytest.mark.asyncio
    async def test_concurrent_http_creates(self, store, db_path):
        """Test that parallel POSTs through the app all land in the store"""
        app = create_app(Settings(database_url=db_path), store=store)
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            responses = await asyncio.gather(
                *(
                    client.post("/model", json={"name": f"m{i}", "version": "v1", "data": str(i)})
                    for i in range(25)
                )
            )
            listed = (await client.get("/model")).json()

        assert all(r.status_code == 200 for r in responses)
        assert len(listed) == 25
        assert len({m["id"] for m in listed}) == 25
