"""Shared model-to-response serializers."""

from typing import Optional

from playbook.db.models import PickupLine, Tag, User
from playbook.schemas import (
    PickupLineResponse,
    ReactionResponse,
    StatisticsResponse,
    TagResponse,
    UserResponse,
)


def user_to_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, username=user.username, display_name=user.display_name)


def tag_to_response(tag: Tag) -> TagResponse:
    return TagResponse(id=tag.id, name=tag.name, description=tag.description)


def pickup_line_to_response(
    pickup_line: PickupLine,
    statistics: Optional[StatisticsResponse] = None,
    reaction: Optional[ReactionResponse] = None,
) -> PickupLineResponse:
    """Map a PickupLine row to its response; statistics and reaction default to neutral."""
    return PickupLineResponse(
        id=pickup_line.id,
        title=pickup_line.title,
        content=pickup_line.content or "",
        visible=bool(pickup_line.visible),
        tags=[tag_to_response(tag) for tag in pickup_line.tags],
        statistics=statistics or StatisticsResponse(),
        reaction=reaction or ReactionResponse(),
        updated_at=pickup_line.updated_at,
        user=user_to_response(pickup_line.user) if pickup_line.user else None,
    )
