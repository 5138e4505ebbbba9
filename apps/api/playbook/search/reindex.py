"""Rebuild pickup line documents from relational truth."""

import logging

from elasticsearch import AsyncElasticsearch
from elasticsearch.helpers import BulkIndexError, async_bulk
from sqlalchemy.ext.asyncio import AsyncSession

from playbook.core.config import Settings
from playbook.core.errors import StoreError
from playbook.repositories import PickupLineRepository
from playbook.search.client import translate_errors
from playbook.search.documents import pickup_line_to_reindex_document

logger = logging.getLogger(__name__)


async def build_reindex_actions(db: AsyncSession, index_name: str) -> list[dict]:
    """Bulk index actions, one full document per pickup line with counters from its reactions."""
    repository = PickupLineRepository(db)
    pickup_lines = await repository.list_all()
    reactions = await repository.get_reactions_by_pickup_line([p.id for p in pickup_lines])
    return [
        {
            "_op_type": "index",
            "_index": index_name,
            "_id": pickup_line.id,
            "_source": pickup_line_to_reindex_document(
                pickup_line, reactions.get(pickup_line.id, [])
            ).to_source(),
        }
        for pickup_line in pickup_lines
    ]


async def reindex_pickup_lines(
    db: AsyncSession, client: AsyncElasticsearch, settings: Settings
) -> int:
    actions = await build_reindex_actions(db, settings.pickup_line_index_name)
    if not actions:
        logger.info("No pickup lines to reindex")
        return 0
    try:
        with translate_errors("reindex pickup lines"):
            indexed, _ = await async_bulk(client, actions)
    except BulkIndexError as e:
        raise StoreError(f"{len(e.errors)} pickup lines failed to reindex", cause=e) from e
    logger.info("Reindexed %s pickup lines into %s", indexed, settings.pickup_line_index_name)
    return indexed
