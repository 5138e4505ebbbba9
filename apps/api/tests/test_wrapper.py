"""Wire-shape tests for the search facade against a mocked client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from elasticsearch import ConnectionError as ElasticConnectionError

from playbook.core.errors import ExternalStoreUnavailableError
from playbook.db.models import PickupLine, Tag, User
from playbook.domain import Visibility, Vote
from playbook.schemas import PickupLineFilters, UserFilters
from playbook.search.wrapper import ElasticSearchWrapper

OWNER = "66666666-6666-6666-6666-666666666666"
EMPTY_RESPONSE = {"hits": {"total": {"value": 0}, "hits": []}}


@pytest.fixture
def client():
    client = AsyncMock()
    client.search = AsyncMock(return_value=EMPTY_RESPONSE)
    client.index = AsyncMock(return_value={"_id": "engine-id"})
    return client


@pytest.fixture
def mapper():
    mapper = MagicMock()
    mapper.hydrate_pickup_lines = AsyncMock(return_value="hydrated")
    mapper.hydrate_users = MagicMock(return_value="users")
    return mapper


@pytest.fixture
def wrapper(client, mapper, settings):
    return ElasticSearchWrapper(client, mapper, settings)


def make_pickup_line() -> PickupLine:
    user = User(id=OWNER, username="o@example.com", display_name="O")
    return PickupLine(
        id="77777777-7777-7777-7777-777777777777",
        title="t",
        content="c",
        visible=False,
        user_id=OWNER,
        user=user,
        tags=[],
    )


async def test_index_pickup_line_uses_entity_id(wrapper, client, settings):
    await wrapper.index_pickup_line(make_pickup_line())
    kwargs = client.index.await_args.kwargs
    assert kwargs["index"] == settings.pickup_line_index_name
    assert kwargs["id"] == "77777777-7777-7777-7777-777777777777"
    assert kwargs["document"]["numberOfTries"] == 0


async def test_update_pickup_line_sends_partial_doc(wrapper, client):
    await wrapper.update_pickup_line(make_pickup_line())
    doc = client.update.await_args.kwargs["doc"]
    assert "numberOfSuccesses" not in doc
    assert "upvotedByUser" not in doc


async def test_delete_user_pickup_lines_filters_by_owner(wrapper, client, settings):
    await wrapper.delete_user_pickup_lines(OWNER)
    client.delete_by_query.assert_awaited_once_with(
        index=settings.pickup_line_index_name,
        query={"bool": {"filter": [{"term": {"userId": OWNER}}]}},
    )


async def test_index_tag_returns_engine_assigned_id(wrapper, client, settings):
    tag = Tag(id="t", name="n", user_id=OWNER)
    assert await wrapper.index_tag(tag) == "engine-id"
    assert "id" not in client.index.await_args.kwargs


async def test_update_and_delete_tag_address_engine_id(wrapper, client, settings):
    tag = Tag(id="t", name="n", user_id=OWNER, search_document_id="engine-id")
    await wrapper.update_tag(tag)
    await wrapper.delete_tag(tag)
    assert client.update.await_args.kwargs["id"] == "engine-id"
    client.delete.assert_awaited_once_with(index=settings.tag_index_name, id="engine-id")


async def test_reaction_update_is_a_script(wrapper, client):
    await wrapper.update_user_reaction(OWNER, "pl-1", True, Vote.UPVOTE)
    kwargs = client.update.await_args.kwargs
    assert kwargs["id"] == "pl-1"
    assert "doc" not in kwargs
    assert kwargs["script"]["params"] == {"starredByUser": OWNER, "upvotedByUser": OWNER}


async def test_feed_forces_visible(wrapper, client, mapper):
    filters = PickupLineFilters(visibility=Visibility.NOT_VISIBLE, user_id=OWNER)
    assert await wrapper.get_pickup_line_feed(OWNER, filters) == "hydrated"
    query = client.search.await_args.kwargs["query"]
    assert {"term": {"visible": True}} in query["bool"]["filter"]
    assert filters.visibility == Visibility.NOT_VISIBLE


async def test_search_pickup_lines_pages_and_hydrates(wrapper, client, mapper, settings):
    await wrapper.search_pickup_lines(OWNER, PickupLineFilters(page=2))
    kwargs = client.search.await_args.kwargs
    assert kwargs["index"] == settings.pickup_line_index_name
    assert kwargs["from_"] == 20
    assert kwargs["size"] == settings.items_per_page
    mapper.hydrate_pickup_lines.assert_awaited_once_with(EMPTY_RESPONSE, OWNER, 2)


async def test_search_users_targets_user_index(wrapper, client, mapper, settings):
    assert await wrapper.search_users(UserFilters(username="bo")) == "users"
    assert client.search.await_args.kwargs["index"] == settings.user_index_name


async def test_transport_errors_become_unavailable(wrapper, client):
    client.index = AsyncMock(side_effect=ElasticConnectionError("refused"))
    with pytest.raises(ExternalStoreUnavailableError) as exc_info:
        await wrapper.index_pickup_line(make_pickup_line())
    assert isinstance(exc_info.value.__cause__, ElasticConnectionError)
