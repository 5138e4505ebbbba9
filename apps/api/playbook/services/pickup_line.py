"""Pickup line writes across the relational store and the search projection."""

import logging

from playbook.core.errors import NotFoundError, ValidationError
from playbook.db.models import PickupLine, Tag, User
from playbook.domain import Vote
from playbook.repositories import PickupLineRepository, TagRepository
from playbook.schemas import (
    PickupLineCreateRequest,
    PickupLineFilters,
    PickupLineListResponse,
    PickupLineResponse,
    PickupLineUpdateRequest,
    ReactionRequest,
    ReactionResponse,
    StatisticsResponse,
)
from playbook.search import ElasticSearchWrapper
from playbook.serializers import pickup_line_to_response
from playbook.services.saga import Saga
from playbook.utils import parse_uuid

logger = logging.getLogger(__name__)


class PickupLineService:
    def __init__(
        self,
        pickup_line_repository: PickupLineRepository,
        tag_repository: TagRepository,
        search: ElasticSearchWrapper,
    ):
        self.pickup_line_repository = pickup_line_repository
        self.tag_repository = tag_repository
        self.search = search

    async def get_tags_from_request(self, tag_ids: list[str], user_id: str) -> list[Tag]:
        """Resolve request tag ids to tags the user owns; unknown or foreign ids are dropped."""
        if not tag_ids:
            return []
        pairs = []
        for raw in tag_ids:
            tag_id = parse_uuid(raw)
            if tag_id is None:
                raise ValidationError(f"Invalid tag id: {raw}")
            pairs.append((tag_id, user_id))
        return await self.tag_repository.get_list_by_tag_id_and_user_id_list(pairs)

    async def create(self, body: PickupLineCreateRequest, user: User) -> PickupLine:
        tags = await self.get_tags_from_request(body.tags, user.id)
        pickup_line = PickupLine(
            title=body.title,
            content=body.content,
            visible=body.visible,
            user_id=user.id,
            user=user,
            tags=tags,
        )
        saga = Saga("create pickup line")
        await saga.step(
            "insert pickup line",
            lambda: self.pickup_line_repository.create(pickup_line),
            lambda: self.pickup_line_repository.delete(pickup_line),
        )
        await saga.step(
            "index pickup line",
            lambda: self.search.index_pickup_line(pickup_line),
            lambda: self.search.delete_pickup_line(pickup_line.id),
            compensate_on_failure=True,
        )
        logger.info("Created pickup line %s for user %s", pickup_line.id, user.id)
        return pickup_line

    async def get_owned(self, pickup_line_id: str, user_id: str) -> PickupLine:
        pickup_line_id = self._parse_id(pickup_line_id)
        pickup_line = await self.pickup_line_repository.get_by_id_and_user_id(pickup_line_id, user_id)
        if pickup_line is None:
            raise NotFoundError("Pickup line not found")
        return pickup_line

    async def update(self, pickup_line_id: str, body: PickupLineUpdateRequest, user_id: str) -> PickupLine:
        """Relational update, then a partial document update. A failed document update
        leaves the row updated and the projection stale until the next reindex."""
        pickup_line = await self.get_owned(pickup_line_id, user_id)
        tags = await self.get_tags_from_request(body.tags, user_id)
        pickup_line.title = body.title
        pickup_line.content = body.content
        pickup_line.visible = body.visible
        pickup_line.tags = tags
        await self.pickup_line_repository.update(pickup_line)
        await self.search.update_pickup_line(pickup_line)
        return pickup_line

    async def delete(self, pickup_line_id: str, user_id: str) -> None:
        pickup_line = await self.get_owned(pickup_line_id, user_id)
        await self.search.delete_pickup_line(pickup_line.id)
        await self.pickup_line_repository.delete(pickup_line)
        logger.info("Deleted pickup line %s", pickup_line.id)

    async def delete_by_user(self, user_id: str) -> None:
        """Purge the user's documents; the rows go with the user's relational cascade."""
        await self.search.delete_user_pickup_lines(user_id)

    async def can_user_see(self, pickup_line_id: str, user_id: str) -> bool:
        pickup_line_id = parse_uuid(pickup_line_id)
        if pickup_line_id is None:
            return False
        row = await self.pickup_line_repository.get_for_visibility_check(pickup_line_id)
        if row is None:
            return False
        owner_id, visible = row
        return visible or owner_id == user_id

    async def get_reaction(self, pickup_line_id: str, user_id: str) -> ReactionResponse:
        reaction = await self.pickup_line_repository.get_reaction(pickup_line_id, user_id)
        if reaction is None:
            return ReactionResponse()
        return ReactionResponse(starred=reaction.starred, vote=Vote(reaction.vote))

    async def update_reaction_by_user(
        self, pickup_line_id: str, user_id: str, body: ReactionRequest
    ) -> ReactionResponse:
        """Upsert the reaction, then apply the transition to the document's counters.

        A failed script leaves the counters behind the reaction rows; the detail view
        reads statistics from the rows.
        """
        if not await self.can_user_see(pickup_line_id, user_id):
            raise NotFoundError("Pickup line not found")
        pickup_line_id = parse_uuid(pickup_line_id)
        old = await self.get_reaction(pickup_line_id, user_id)
        new_vote = body.vote or Vote.NONE
        await self.pickup_line_repository.upsert_reaction(
            pickup_line_id, user_id, body.starred, new_vote
        )
        await self.search.update_user_reaction(
            user_id,
            pickup_line_id,
            body.starred,
            new_vote,
            old_starred=old.starred,
            old_vote=old.vote,
        )
        return ReactionResponse(starred=body.starred, vote=new_vote)

    async def get_statistics(self, pickup_line_id: str) -> StatisticsResponse:
        return await self.pickup_line_repository.get_statistics(pickup_line_id)

    async def get_detail(self, pickup_line_id: str, user_id: str) -> PickupLineResponse:
        """Single pickup line with statistics aggregated from the reaction rows."""
        pickup_line = await self.pickup_line_repository.get_by_id(self._parse_id(pickup_line_id))
        if pickup_line is None or not (pickup_line.visible or pickup_line.user_id == user_id):
            raise NotFoundError("Pickup line not found")
        return pickup_line_to_response(
            pickup_line,
            statistics=await self.get_statistics(pickup_line.id),
            reaction=await self.get_reaction(pickup_line.id, user_id),
        )

    async def get_list(self, user_id: str, filters: PickupLineFilters) -> PickupLineListResponse:
        return await self.search.search_pickup_lines(user_id, filters)

    async def get_feed(self, user_id: str, filters: PickupLineFilters) -> PickupLineListResponse:
        return await self.search.get_pickup_line_feed(user_id, filters)

    @staticmethod
    def _parse_id(pickup_line_id: str) -> str:
        parsed = parse_uuid(pickup_line_id)
        if parsed is None:
            raise ValidationError(f"Invalid pickup line id: {pickup_line_id}")
        return parsed
