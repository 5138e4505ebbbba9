"""Tag writes across the relational store and the tag index."""

import logging
import uuid

from playbook.core.errors import NotFoundError, PlaybookError
from playbook.db.models import Tag
from playbook.repositories import TagRepository
from playbook.schemas import TagCreateRequest, TagUpdateRequest
from playbook.search import ElasticSearchWrapper
from playbook.services.saga import Saga

logger = logging.getLogger(__name__)


class TagService:
    def __init__(self, tag_repository: TagRepository, search: ElasticSearchWrapper):
        self.tag_repository = tag_repository
        self.search = search

    async def create(self, body: TagCreateRequest, user_id: str) -> Tag:
        """Index first so the engine-assigned document id can be stored on the row."""
        tag = Tag(
            id=str(uuid.uuid4()),
            user_id=user_id,
            name=body.name,
            description=body.description,
        )
        saga = Saga("create tag")
        tag.search_document_id = await saga.step(
            "index tag",
            lambda: self.search.index_tag(tag),
            lambda: self.search.delete_tag(tag),
        )
        await saga.step("insert tag", lambda: self.tag_repository.create(tag))
        logger.info("Created tag %s for user %s", tag.id, user_id)
        return tag

    async def get_owned(self, tag_id: str, user_id: str) -> Tag:
        tag = await self.tag_repository.get_by_id_and_user_id(tag_id, user_id)
        if tag is None:
            raise NotFoundError("Tag not found")
        return tag

    async def update(self, tag_id: str, body: TagUpdateRequest, user_id: str) -> Tag:
        tag = await self.get_owned(tag_id, user_id)
        tag.name = body.name
        tag.description = body.description
        await self.tag_repository.update(tag)
        await self.search.update_tag(tag)
        return tag

    async def delete(self, tag_id: str, user_id: str) -> None:
        tag = await self.get_owned(tag_id, user_id)
        try:
            await self.search.delete_tag(tag)
        except PlaybookError:
            logger.warning("Tag document %s could not be deleted", tag.search_document_id, exc_info=True)
        await self.tag_repository.delete(tag)

    async def get_list_by_user_id(self, user_id: str) -> list[Tag]:
        return await self.tag_repository.get_by_user_id(user_id)

    async def get_list_by_tag_id_and_user_id_list(self, pairs: list[tuple[str, str]]) -> list[Tag]:
        return await self.tag_repository.get_list_by_tag_id_and_user_id_list(pairs)
