"""Index schemas for pickup lines, tags and users, and boot-time index creation."""

import logging

from elasticsearch import AsyncElasticsearch

from playbook.core.config import Settings
from playbook.core.constants import (
    CONTENT_FIELD,
    DISPLAY_NAME_FIELD,
    DOWNVOTED_BY_USER_FIELD,
    ID_FIELD,
    MAX_SHINGLE_SIZE,
    NAME_FIELD,
    NUMBER_OF_FAILURES_FIELD,
    NUMBER_OF_SUCCESSES_FIELD,
    NUMBER_OF_TRIES_FIELD,
    STARRED_BY_USER_FIELD,
    STARRED_FIELD,
    SUCCESS_PERCENTAGE_FIELD,
    TAGS_FIELD,
    TITLE_FIELD,
    UPDATED_AT_FIELD,
    UPVOTED_BY_USER_FIELD,
    USER_ID_FIELD,
    USERNAME_FIELD,
    VISIBLE_FIELD,
)
from playbook.core.errors import ExternalStoreUnavailableError, PlaybookError
from playbook.search.client import translate_errors

logger = logging.getLogger(__name__)

KEYWORD = {"type": "keyword"}
SEARCH_AS_YOU_TYPE = {"type": "search_as_you_type", "max_shingle_size": MAX_SHINGLE_SIZE}

# Owner username/display_name are denormalized onto pickup lines as exact keywords;
# only the user index itself uses autocomplete for them.
PICKUP_LINE_MAPPINGS = {
    "properties": {
        ID_FIELD: KEYWORD,
        TITLE_FIELD: SEARCH_AS_YOU_TYPE,
        CONTENT_FIELD: {"type": "text"},
        NUMBER_OF_TRIES_FIELD: {"type": "unsigned_long"},
        NUMBER_OF_FAILURES_FIELD: {"type": "unsigned_long"},
        NUMBER_OF_SUCCESSES_FIELD: {"type": "unsigned_long"},
        SUCCESS_PERCENTAGE_FIELD: {"type": "float"},
        STARRED_FIELD: {"type": "boolean"},
        STARRED_BY_USER_FIELD: KEYWORD,
        UPVOTED_BY_USER_FIELD: KEYWORD,
        DOWNVOTED_BY_USER_FIELD: KEYWORD,
        TAGS_FIELD: KEYWORD,
        VISIBLE_FIELD: {"type": "boolean"},
        DISPLAY_NAME_FIELD: KEYWORD,
        USER_ID_FIELD: KEYWORD,
        USERNAME_FIELD: KEYWORD,
        UPDATED_AT_FIELD: {"type": "date"},
    }
}

TAG_MAPPINGS = {
    "properties": {
        ID_FIELD: KEYWORD,
        NAME_FIELD: KEYWORD,
        USER_ID_FIELD: KEYWORD,
    }
}

USER_MAPPINGS = {
    "properties": {
        ID_FIELD: KEYWORD,
        USERNAME_FIELD: SEARCH_AS_YOU_TYPE,
        DISPLAY_NAME_FIELD: SEARCH_AS_YOU_TYPE,
    }
}


class IndexManager:
    """Creates the three indices. Creation is not idempotent; callers check existence first."""

    def __init__(self, client: AsyncElasticsearch, settings: Settings):
        self.client = client
        self.pickup_line_index_name = settings.pickup_line_index_name
        self.tag_index_name = settings.tag_index_name
        self.user_index_name = settings.user_index_name

    async def index_exists(self, name: str) -> bool:
        with translate_errors("index exists"):
            return bool(await self.client.indices.exists(index=name))

    async def _create(self, name: str, mappings: dict) -> None:
        with translate_errors(f"create index {name}"):
            await self.client.indices.create(index=name, mappings=mappings)
        logger.info("Created search index %s", name)

    async def create_pickup_line_index(self) -> None:
        await self._create(self.pickup_line_index_name, PICKUP_LINE_MAPPINGS)

    async def create_tag_index(self) -> None:
        await self._create(self.tag_index_name, TAG_MAPPINGS)

    async def create_user_index(self) -> None:
        await self._create(self.user_index_name, USER_MAPPINGS)

    async def ensure_indices(self) -> None:
        """Create any missing index. Any failure is fatal: the API must not serve without them."""
        required = (
            (self.pickup_line_index_name, self.create_pickup_line_index),
            (self.tag_index_name, self.create_tag_index),
            (self.user_index_name, self.create_user_index),
        )
        for name, create in required:
            try:
                if not await self.index_exists(name):
                    await create()
            except PlaybookError as e:
                raise ExternalStoreUnavailableError(
                    f"Required search index {name} is unavailable", cause=e
                ) from e
