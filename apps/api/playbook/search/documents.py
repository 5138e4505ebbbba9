"""Projection of relational entities onto search documents.

Full projections are written on create. The partial pickup line projection carries
metadata only; membership sets and counters change exclusively through reaction scripts.
"""

from datetime import datetime
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from playbook.db.models import PickupLine, Reaction, Tag, User
from playbook.domain import Vote
from playbook.utils import success_ratio


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_source(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PickupLineDocument(_Document):
    id: str
    title: str
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    user_id: str = Field(alias="userId")
    username: str = ""
    display_name: Optional[str] = None
    visible: bool = False
    starred: bool = False
    number_of_successes: int = Field(default=0, alias="numberOfSuccesses")
    number_of_failures: int = Field(default=0, alias="numberOfFailures")
    number_of_tries: int = Field(default=0, alias="numberOfTries")
    success_percentage: float = Field(default=0.0, alias="successPercentage")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
    starred_by_user: Optional[list[str]] = Field(default=None, alias="starredByUser")
    upvoted_by_user: Optional[list[str]] = Field(default=None, alias="upvotedByUser")
    downvoted_by_user: Optional[list[str]] = Field(default=None, alias="downvotedByUser")


class UpdatePickupLineDocument(_Document):
    title: str
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    visible: bool = False
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class TagDocument(_Document):
    id: str
    name: str
    user_id: str = Field(alias="userId")


class UserDocument(_Document):
    id: str
    username: str
    display_name: Optional[str] = None


def pickup_line_to_document(pickup_line: PickupLine) -> PickupLineDocument:
    """Full projection: owner denormalized, counters zero, membership sets absent."""
    user = pickup_line.user
    return PickupLineDocument(
        id=pickup_line.id,
        title=pickup_line.title,
        content=pickup_line.content or "",
        tags=[tag.id for tag in pickup_line.tags],
        user_id=pickup_line.user_id,
        username=user.username if user else "",
        display_name=user.display_name if user else None,
        visible=bool(pickup_line.visible),
        updated_at=pickup_line.updated_at,
    )


def pickup_line_to_update_document(pickup_line: PickupLine) -> UpdatePickupLineDocument:
    return UpdatePickupLineDocument(
        title=pickup_line.title,
        content=pickup_line.content or "",
        tags=[tag.id for tag in pickup_line.tags],
        visible=bool(pickup_line.visible),
        updated_at=pickup_line.updated_at,
    )


def pickup_line_to_reindex_document(
    pickup_line: PickupLine, reactions: Iterable[Reaction]
) -> PickupLineDocument:
    """Full projection with membership sets and counters rebuilt from reaction rows."""
    document = pickup_line_to_document(pickup_line)
    starred, upvoted, downvoted = [], [], []
    for reaction in reactions:
        if reaction.starred:
            starred.append(reaction.user_id)
        if reaction.vote == Vote.UPVOTE.value:
            upvoted.append(reaction.user_id)
        elif reaction.vote == Vote.DOWNVOTE.value:
            downvoted.append(reaction.user_id)
    tries = len(upvoted) + len(downvoted)
    return document.model_copy(
        update={
            "starred_by_user": starred,
            "upvoted_by_user": upvoted,
            "downvoted_by_user": downvoted,
            "number_of_successes": len(upvoted),
            "number_of_failures": len(downvoted),
            "number_of_tries": tries,
            "success_percentage": success_ratio(len(upvoted), tries),
        }
    )


def tag_to_document(tag: Tag) -> TagDocument:
    return TagDocument(id=tag.id, name=tag.name, user_id=tag.user_id)


def user_to_document(user: User) -> UserDocument:
    return UserDocument(id=user.id, username=user.username, display_name=user.display_name)
