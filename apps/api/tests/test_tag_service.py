"""Tag writes across the relational store and the tag index."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from playbook.core.errors import ExternalStoreUnavailableError, NotFoundError
from playbook.repositories import TagRepository
from playbook.schemas import TagCreateRequest, TagUpdateRequest


async def test_create_stores_engine_document_id(db, tag_service, search_client, settings, alice):
    tag = await tag_service.create(TagCreateRequest(name="cheesy"), alice.id)

    stored = await TagRepository(db).get_by_id(tag.id)
    assert stored.search_document_id is not None
    document = search_client.documents(settings.tag_index_name)[stored.search_document_id]
    assert document == {"id": tag.id, "name": "cheesy", "userId": alice.id}


async def test_index_failure_writes_no_row(db, tag_service, search_client, alice):
    search_client.fail_on("index")
    with pytest.raises(ExternalStoreUnavailableError):
        await tag_service.create(TagCreateRequest(name="cheesy"), alice.id)
    assert await TagRepository(db).get_by_user_id(alice.id) == []


async def test_insert_failure_deletes_document(tag_service, search_client, settings, alice):
    tag_service.tag_repository.create = AsyncMock(
        side_effect=IntegrityError("INSERT", {}, Exception("constraint"))
    )
    with pytest.raises(IntegrityError):
        await tag_service.create(TagCreateRequest(name="cheesy"), alice.id)
    assert search_client.documents(settings.tag_index_name) == {}


async def test_update_rewrites_document(tag_service, search_client, settings, alice):
    tag = await tag_service.create(TagCreateRequest(name="cheesy"), alice.id)

    updated = await tag_service.update(tag.id, TagUpdateRequest(name="smooth", description="d"), alice.id)

    assert updated.description == "d"
    assert search_client.documents(settings.tag_index_name)[tag.search_document_id]["name"] == "smooth"


async def test_other_users_cannot_touch_tag(tag_service, alice, bob):
    tag = await tag_service.create(TagCreateRequest(name="cheesy"), alice.id)
    with pytest.raises(NotFoundError):
        await tag_service.update(tag.id, TagUpdateRequest(name="mine now"), bob.id)
    with pytest.raises(NotFoundError):
        await tag_service.delete(tag.id, bob.id)


async def test_delete_ignores_search_failure(db, tag_service, search_client, alice):
    tag = await tag_service.create(TagCreateRequest(name="cheesy"), alice.id)
    search_client.fail_on("delete")

    await tag_service.delete(tag.id, alice.id)

    assert await TagRepository(db).get_by_id(tag.id) is None


async def test_list_by_user(tag_service, alice, bob):
    await tag_service.create(TagCreateRequest(name="b"), alice.id)
    await tag_service.create(TagCreateRequest(name="a"), alice.id)
    await tag_service.create(TagCreateRequest(name="c"), bob.id)

    tags = await tag_service.get_list_by_user_id(alice.id)

    assert [t.name for t in tags] == ["a", "b"]
