"""Rebuilding pickup line documents from relational rows."""

from unittest.mock import AsyncMock, patch

import pytest
from elasticsearch.helpers import BulkIndexError

from playbook.core.errors import StoreError
from playbook.domain import Vote
from playbook.repositories import PickupLineRepository
from playbook.schemas import PickupLineCreateRequest
from playbook.search.reindex import build_reindex_actions, reindex_pickup_lines
from tests.conftest import make_user


async def test_actions_rebuild_counters_from_reactions(db, pickup_line_service, settings, alice, bob):
    carol = await make_user(db, "carol@example.com")
    pickup_line = await pickup_line_service.create(
        PickupLineCreateRequest(title="Is it hot in here", visible=True), alice
    )
    repository = PickupLineRepository(db)
    await repository.upsert_reaction(pickup_line.id, bob.id, True, Vote.UPVOTE)
    await repository.upsert_reaction(pickup_line.id, carol.id, False, Vote.DOWNVOTE)

    actions = await build_reindex_actions(db, settings.pickup_line_index_name)

    assert len(actions) == 1
    action = actions[0]
    assert action["_index"] == settings.pickup_line_index_name
    assert action["_id"] == pickup_line.id
    source = action["_source"]
    assert source["starredByUser"] == [bob.id]
    assert source["upvotedByUser"] == [bob.id]
    assert source["downvotedByUser"] == [carol.id]
    assert (source["numberOfSuccesses"], source["numberOfFailures"], source["numberOfTries"]) == (1, 1, 2)
    assert source["successPercentage"] == 0.5


async def test_pickup_line_without_reactions_gets_empty_sets(db, pickup_line_service, settings, alice):
    await pickup_line_service.create(PickupLineCreateRequest(title="quiet"), alice)

    (action,) = await build_reindex_actions(db, settings.pickup_line_index_name)

    assert action["_source"]["upvotedByUser"] == []
    assert action["_source"]["numberOfTries"] == 0


async def test_reindex_sends_bulk(db, pickup_line_service, search_client, settings, alice):
    await pickup_line_service.create(PickupLineCreateRequest(title="one"), alice)
    await pickup_line_service.create(PickupLineCreateRequest(title="two"), alice)

    with patch("playbook.search.reindex.async_bulk", AsyncMock(return_value=(2, []))) as bulk:
        indexed = await reindex_pickup_lines(db, search_client, settings)

    assert indexed == 2
    client, actions = bulk.call_args.args
    assert client is search_client
    assert {a["_source"]["title"] for a in actions} == {"one", "two"}


async def test_reindex_of_empty_store_skips_bulk(db, search_client, settings):
    with patch("playbook.search.reindex.async_bulk", AsyncMock()) as bulk:
        assert await reindex_pickup_lines(db, search_client, settings) == 0
    bulk.assert_not_called()


async def test_bulk_errors_become_store_error(db, pickup_line_service, search_client, settings, alice):
    await pickup_line_service.create(PickupLineCreateRequest(title="one"), alice)
    failure = BulkIndexError("1 document(s) failed to index.", [{"index": {"status": 400}}])

    with patch("playbook.search.reindex.async_bulk", AsyncMock(side_effect=failure)):
        with pytest.raises(StoreError):
            await reindex_pickup_lines(db, search_client, settings)
