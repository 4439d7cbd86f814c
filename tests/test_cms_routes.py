from datetime import date

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from portfolio.database import get_db
from portfolio.routes import cms
from portfolio.services.photo_store import PhotoStore, get_photo_store
from tests.helpers import add_rows, dated_rows, make_row


@pytest.fixture
def store(session_factory, resolver):
    return PhotoStore(session_factory, resolver, cache_ttl=60)


@pytest_asyncio.fixture
async def client(session_factory, store):
    cms_app = FastAPI()
    cms_app.include_router(cms.router, prefix="/api")

    async def override_get_db():
        async with session_factory() as session:
            yield session

    cms_app.dependency_overrides[get_db] = override_get_db
    cms_app.dependency_overrides[get_photo_store] = lambda: store

    transport = httpx.ASGITransport(app=cms_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


@pytest.mark.asyncio
async def test_list_photos(client, session_factory):
    await add_rows(session_factory, dated_rows("p", 3, "street"))

    response = await client.get("/api/cms/photos")

    assert response.status_code == 200
    body = response.json()
    assert sorted(p["id"] for p in body) == ["p-00", "p-01", "p-02"]
    assert all(p["created_at"] for p in body)
    assert body[0]["thumbnail"].startswith("https://cdn.example.com/")


@pytest.mark.asyncio
async def test_update_metadata_invalidates_gallery_cache(client, session_factory, store):
    await add_rows(session_factory, [make_row("p1", category="street", date_taken=date(2022, 1, 1))])
    assert (await store.fetch("street", 1, 40)).total == 1
    assert (await store.fetch("nature", 1, 40)).total == 0

    response = await client.put(
        "/api/cms/photos/p1",
        json={"title": "  Fog over the lake ", "category": "nature", "aperture": "f/8"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Fog over the lake"
    assert body["category"] == "nature"
    assert body["aperture"] == "f/8"
    # Untouched fields keep their values
    assert body["date_taken"] == "2022-01-01"

    assert (await store.fetch("street", 1, 40)).total == 0
    assert (await store.fetch("nature", 1, 40)).items[0].title == "Fog over the lake"


@pytest.mark.asyncio
async def test_update_can_clear_category(client, session_factory):
    await add_rows(session_factory, [make_row("p1", category="street")])

    response = await client.put("/api/cms/photos/p1", json={"category": None})

    assert response.status_code == 200
    assert response.json()["category"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"title": ""}, {"title": "   "}, {"title": None}, {"category": "macro"}])
async def test_update_rejects_invalid_metadata(client, session_factory, payload):
    await add_rows(session_factory, [make_row("p1", category="street")])

    response = await client.put("/api/cms/photos/p1", json=payload)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_missing_photo(client):
    response = await client.put("/api/cms/photos/nope", json={"title": "x"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_invalidates_gallery_cache(client, session_factory, store):
    await add_rows(session_factory, dated_rows("p", 2, "portrait"))
    assert await store.count_only("portrait") == 2

    response = await client.delete("/api/cms/photos/p-00")

    assert response.status_code == 200
    assert response.json()["id"] == "p-00"
    assert await store.count_only("portrait") == 1
    assert await store.get_by_id("p-00") is None


@pytest.mark.asyncio
async def test_delete_missing_photo(client):
    response = await client.delete("/api/cms/photos/nope")

    assert response.status_code == 404
