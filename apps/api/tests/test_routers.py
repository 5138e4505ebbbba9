"""HTTP surface: auth, status codes and error mapping."""

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker

from playbook.core import create_access_token
from playbook.dependencies import get_db, get_search_client
from playbook.main import app
from playbook.repositories import PickupLineRepository


@pytest.fixture
async def client(db, search_client):
    async def override_db():
        yield db

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_search_client] = lambda: search_client
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def session_client(engine, search_client, monkeypatch):
    """Client whose requests open their own sessions through get_db."""
    session_factory = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    monkeypatch.setattr("playbook.dependencies.async_session", session_factory)
    app.dependency_overrides[get_search_client] = lambda: search_client
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client, session_factory
    app.dependency_overrides.clear()


def auth(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject=user.id)}"}


async def test_health(client):
    response = await client.get("/health")
    assert response.json() == {"status": "ok"}


async def test_requires_token(client):
    response = await client.get("/pickup-lines")
    assert response.status_code == 401


async def test_create_and_read_pickup_line(client, alice, bob):
    created = await client.post(
        "/pickup-lines",
        json={"title": "Are you wifi?", "content": "I feel a connection", "visible": True},
        headers=auth(alice),
    )
    assert created.status_code == 201
    pickup_line_id = created.json()["id"]

    reaction = await client.put(
        f"/pickup-lines/{pickup_line_id}/reaction",
        json={"starred": True, "vote": "UPVOTE"},
        headers=auth(bob),
    )
    assert reaction.json() == {"starred": True, "vote": "UPVOTE"}

    detail = await client.get(f"/pickup-lines/{pickup_line_id}", headers=auth(bob))
    assert detail.status_code == 200
    body = detail.json()
    assert body["statistics"]["number_of_successes"] == 1
    assert body["user"]["username"] == "alice@example.com"

    listing = await client.get("/pickup-lines", params={"starred": "true"}, headers=auth(bob))
    assert [p["id"] for p in listing.json()["pickup_lines"]] == [pickup_line_id]


async def test_hidden_pickup_line_is_not_found_for_others(client, alice, bob):
    created = await client.post("/pickup-lines", json={"title": "secret"}, headers=auth(alice))
    pickup_line_id = created.json()["id"]

    assert (await client.get(f"/pickup-lines/{pickup_line_id}", headers=auth(bob))).status_code == 404
    reaction = await client.put(
        f"/pickup-lines/{pickup_line_id}/reaction", json={"starred": True}, headers=auth(bob)
    )
    assert reaction.status_code == 404


async def test_malformed_ids_are_bad_requests(client, alice):
    assert (await client.get("/pickup-lines/not-a-uuid", headers=auth(alice))).status_code == 400
    response = await client.get("/pickup-lines", params={"user_id": "nope"}, headers=auth(alice))
    assert response.status_code == 400


async def test_unavailable_search_is_server_error(client, search_client, alice):
    search_client.fail_on("search")
    response = await client.get("/pickup-lines/feed", headers=auth(alice))
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


async def test_delete_pickup_line(client, alice):
    created = await client.post("/pickup-lines", json={"title": "bye"}, headers=auth(alice))
    pickup_line_id = created.json()["id"]

    response = await client.delete(f"/pickup-lines/{pickup_line_id}", headers=auth(alice))

    assert response.status_code == 204
    assert (await client.get(f"/pickup-lines/{pickup_line_id}", headers=auth(alice))).status_code == 404


async def test_tags_crud(client, alice):
    created = await client.post("/tags", json={"name": "nerdy"}, headers=auth(alice))
    assert created.status_code == 201
    tag_id = created.json()["id"]

    updated = await client.put(f"/tags/{tag_id}", json={"name": "geeky"}, headers=auth(alice))
    assert updated.json()["name"] == "geeky"

    listing = await client.get("/tags", headers=auth(alice))
    assert [t["name"] for t in listing.json()] == ["geeky"]

    assert (await client.delete(f"/tags/{tag_id}", headers=auth(alice))).status_code == 204


async def test_register_and_login(client):
    created = await client.post(
        "/user", json={"username": "erin@example.com", "password": "pw"}
    )
    assert created.status_code == 201
    assert created.json()["display_name"] == "erin@example.com"

    bad = await client.post("/user/login", json={"username": "erin@example.com", "password": "no"})
    assert bad.status_code == 401

    login = await client.post("/user/login", json={"username": "erin@example.com", "password": "pw"})
    token = login.json()["access_token"]
    me = await client.get("/user", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["username"] == "erin@example.com"


async def test_invalid_username_is_bad_request(client):
    response = await client.post("/user", json={"username": "erin", "password": "pw"})
    assert response.status_code == 400


async def test_token_accepted_as_query_param(client, alice):
    token = create_access_token(subject=alice.id)
    response = await client.get("/user", params={"token": token})
    assert response.json()["id"] == alice.id


async def test_relational_writes_survive_search_failures(session_client, search_client, alice, bob):
    client, session_factory = session_client
    created = await client.post(
        "/pickup-lines", json={"title": "old", "visible": True}, headers=auth(alice)
    )
    pickup_line_id = created.json()["id"]
    search_client.fail_on("update")

    updated = await client.put(
        f"/pickup-lines/{pickup_line_id}", json={"title": "new", "visible": True}, headers=auth(alice)
    )
    reaction = await client.put(
        f"/pickup-lines/{pickup_line_id}/reaction",
        json={"starred": False, "vote": "UPVOTE"},
        headers=auth(bob),
    )

    assert (updated.status_code, reaction.status_code) == (500, 500)
    async with session_factory() as session:
        repo = PickupLineRepository(session)
        assert (await repo.get_by_id(pickup_line_id)).title == "new"
        stored = await repo.get_reaction(pickup_line_id, bob.id)
        assert stored is not None and stored.vote == "UPVOTE"
