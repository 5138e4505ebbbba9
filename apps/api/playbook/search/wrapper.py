"""Search execution facade over the pickup line, tag and user indices."""

import logging

from elasticsearch import AsyncElasticsearch

from playbook.core.config import Settings
from playbook.db.models import PickupLine, Tag, User
from playbook.domain import Visibility, Vote
from playbook.schemas import PickupLineFilters, PickupLineListResponse, UserFilters, UserListResponse
from playbook.search.client import translate_errors
from playbook.search.documents import (
    pickup_line_to_document,
    pickup_line_to_update_document,
    tag_to_document,
    user_to_document,
)
from playbook.search.mapper import SearchResultMapper
from playbook.search.query import BoolQueryBuilder, SearchRequestBuilder
from playbook.search.scripts import build_reaction_script

logger = logging.getLogger(__name__)


class ElasticSearchWrapper:
    def __init__(self, client: AsyncElasticsearch, mapper: SearchResultMapper, settings: Settings):
        self.client = client
        self.mapper = mapper
        self.items_per_page = settings.items_per_page
        self.minimum_should_match = settings.search_minimum_should_match
        self.random_seed = settings.search_random_seed
        self.pickup_line_index_name = settings.pickup_line_index_name
        self.tag_index_name = settings.tag_index_name
        self.user_index_name = settings.user_index_name

    def _request_builder(self) -> SearchRequestBuilder:
        return SearchRequestBuilder(
            BoolQueryBuilder(),
            self.items_per_page,
            self.minimum_should_match,
            random_seed=self.random_seed,
        )

    # ------------------------------------------------------------------
    # Pickup lines
    # ------------------------------------------------------------------

    async def index_pickup_line(self, pickup_line: PickupLine) -> None:
        document = pickup_line_to_document(pickup_line)
        with translate_errors("index pickup line"):
            await self.client.index(
                index=self.pickup_line_index_name,
                id=pickup_line.id,
                document=document.to_source(),
            )

    async def update_pickup_line(self, pickup_line: PickupLine) -> None:
        """Partial doc update; counters and membership sets are left untouched."""
        document = pickup_line_to_update_document(pickup_line)
        with translate_errors("update pickup line"):
            await self.client.update(
                index=self.pickup_line_index_name,
                id=pickup_line.id,
                doc=document.to_source(),
            )

    async def delete_pickup_line(self, pickup_line_id: str) -> None:
        with translate_errors("delete pickup line"):
            await self.client.delete(index=self.pickup_line_index_name, id=pickup_line_id)

    async def delete_user_pickup_lines(self, user_id: str) -> None:
        query = BoolQueryBuilder()
        query.with_user_filter(user_id)
        with translate_errors("delete user pickup lines"):
            await self.client.delete_by_query(
                index=self.pickup_line_index_name, query=query.build()
            )

    async def update_user_reaction(
        self,
        user_id: str,
        pickup_line_id: str,
        starred: bool,
        vote: Vote,
        old_starred: bool = False,
        old_vote: Vote = Vote.NONE,
    ) -> None:
        script = build_reaction_script(user_id, starred, vote, old_starred, old_vote)
        with translate_errors("update reaction"):
            await self.client.update(
                index=self.pickup_line_index_name,
                id=pickup_line_id,
                script=script.to_request(),
            )

    async def search_pickup_lines(
        self, user_id: str, filters: PickupLineFilters
    ) -> PickupLineListResponse:
        request = self._request_builder()
        request.apply_filters(filters, user_id)
        request.apply_sorting(filters)
        body = request.build()
        logger.debug("Pickup line search for %s: %s", user_id, body)
        with translate_errors("search pickup lines"):
            response = await self.client.search(index=self.pickup_line_index_name, **body)
        return await self.mapper.hydrate_pickup_lines(response, user_id, filters.page)

    async def get_pickup_line_feed(
        self, user_id: str, filters: PickupLineFilters
    ) -> PickupLineListResponse:
        feed_filters = filters.model_copy(update={"visibility": Visibility.VISIBLE})
        return await self.search_pickup_lines(user_id, feed_filters)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    async def index_tag(self, tag: Tag) -> str:
        """Index a tag document and return the id the engine assigned to it."""
        with translate_errors("index tag"):
            response = await self.client.index(
                index=self.tag_index_name, document=tag_to_document(tag).to_source()
            )
        return response["_id"]

    async def update_tag(self, tag: Tag) -> None:
        with translate_errors("update tag"):
            await self.client.update(
                index=self.tag_index_name,
                id=tag.search_document_id,
                doc=tag_to_document(tag).to_source(),
            )

    async def delete_tag(self, tag: Tag) -> None:
        with translate_errors("delete tag"):
            await self.client.delete(index=self.tag_index_name, id=tag.search_document_id)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def index_user(self, user: User) -> None:
        with translate_errors("index user"):
            await self.client.index(
                index=self.user_index_name,
                id=user.id,
                document=user_to_document(user).to_source(),
            )

    async def delete_user(self, user_id: str) -> None:
        with translate_errors("delete user"):
            await self.client.delete(index=self.user_index_name, id=user_id)

    async def search_users(self, filters: UserFilters) -> UserListResponse:
        request = self._request_builder()
        request.apply_user_filters(filters)
        with translate_errors("search users"):
            response = await self.client.search(index=self.user_index_name, **request.build())
        return self.mapper.hydrate_users(response, filters.page)
