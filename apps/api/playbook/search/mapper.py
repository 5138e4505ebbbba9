"""Hydration of search hits into API results using relational lookups."""

import logging
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from playbook.core.errors import SerializationError
from playbook.db.models import Tag
from playbook.domain import Vote
from playbook.repositories import PickupLineRepository, TagRepository
from playbook.schemas import (
    PickupLineListResponse,
    PickupLineResponse,
    ReactionResponse,
    StatisticsResponse,
    TagResponse,
    UserListResponse,
    UserResponse,
)
from playbook.search.documents import PickupLineDocument, UserDocument

logger = logging.getLogger(__name__)


def _hits(response: Mapping[str, Any]) -> tuple[int, list[dict]]:
    try:
        hits = response["hits"]
        total = hits["total"]
        total_value = total["value"] if isinstance(total, Mapping) else int(total)
        return int(total_value), list(hits["hits"])
    except (KeyError, TypeError, ValueError) as e:
        raise SerializationError("Malformed search response", cause=e) from e


class SearchResultMapper:
    """Turns raw search responses into list responses. Tag lookups are cached per call."""

    def __init__(self, tag_repository: TagRepository, pickup_line_repository: PickupLineRepository):
        self.tag_repository = tag_repository
        self.pickup_line_repository = pickup_line_repository

    async def resolve_tags(
        self, tag_ids: list[str], owner_id: str, cache: dict[str, Tag]
    ) -> list[Tag]:
        """Tags of one owner in document order; ids already in cache are not fetched again."""
        missing = [(tag_id, owner_id) for tag_id in dict.fromkeys(tag_ids) if tag_id not in cache]
        if missing:
            for tag in await self.tag_repository.get_list_by_tag_id_and_user_id_list(missing):
                cache[tag.id] = tag
        return [cache[tag_id] for tag_id in tag_ids if tag_id in cache]

    async def get_reaction(self, pickup_line_id: str, user_id: str) -> ReactionResponse:
        reaction = await self.pickup_line_repository.get_reaction(pickup_line_id, user_id)
        if reaction is None:
            return ReactionResponse(starred=False, vote=Vote.NONE)
        return ReactionResponse(starred=reaction.starred, vote=Vote(reaction.vote))

    async def hydrate_pickup_lines(
        self, response: Mapping[str, Any], user_id: str, page: int
    ) -> PickupLineListResponse:
        total, hits = _hits(response)
        cache: dict[str, Tag] = {}
        pickup_lines = []
        for hit in hits:
            try:
                document = PickupLineDocument.model_validate(hit["_source"])
            except (KeyError, PydanticValidationError) as e:
                logger.warning("Unreadable pickup line document %s", hit.get("_id"))
                raise SerializationError("Malformed pickup line document", cause=e) from e

            tags = await self.resolve_tags(document.tags, document.user_id, cache)
            reaction = await self.get_reaction(document.id, user_id)
            pickup_lines.append(
                PickupLineResponse(
                    id=document.id,
                    title=document.title,
                    content=document.content,
                    visible=document.visible,
                    tags=[TagResponse.model_validate(tag) for tag in tags],
                    statistics=StatisticsResponse(
                        number_of_successes=document.number_of_successes,
                        number_of_failures=document.number_of_failures,
                        number_of_tries=document.number_of_tries,
                        success_percentage=document.success_percentage,
                    ),
                    reaction=reaction,
                    updated_at=document.updated_at,
                    user=UserResponse(
                        id=document.user_id,
                        username=document.username,
                        display_name=document.display_name,
                    ),
                )
            )
        return PickupLineListResponse(total=total, page=page, pickup_lines=pickup_lines)

    def hydrate_users(self, response: Mapping[str, Any], page: int) -> UserListResponse:
        total, hits = _hits(response)
        users = []
        for hit in hits:
            try:
                document = UserDocument.model_validate(hit["_source"])
            except (KeyError, PydanticValidationError) as e:
                raise SerializationError("Malformed user document", cause=e) from e
            users.append(
                UserResponse(
                    id=document.id,
                    username=document.username,
                    display_name=document.display_name,
                )
            )
        return UserListResponse(total=total, page=page, users=users)
