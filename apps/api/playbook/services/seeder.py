"""Bulk demo data: users with their tags and pickup lines, then random reactions between them."""

import logging
import random
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from playbook.core.errors import ValidationError
from playbook.db.models import PickupLine, Tag, User
from playbook.domain import Vote
from playbook.schemas import (
    PickupLineCreateRequest,
    ReactionRequest,
    TagCreateRequest,
    UserCreateRequest,
)
from playbook.services.pickup_line import PickupLineService
from playbook.services.tag import TagService
from playbook.services.user import UserService

logger = logging.getLogger(__name__)


class SeedPickupLine(BaseModel):
    title: str
    content: str = ""
    visible: bool = True
    # Tag names, resolved against the tags seeded for the same user
    tags: list[str] = Field(default_factory=list)


class SeedUser(BaseModel):
    user: UserCreateRequest
    tags: list[TagCreateRequest] = Field(default_factory=list)
    pickup_lines: list[SeedPickupLine] = Field(default_factory=list)


class SeedFile(BaseModel):
    requests: list[SeedUser]


@dataclass
class SeededUser:
    user: User
    tags: dict[str, Tag] = field(default_factory=dict)
    pickup_lines: list[PickupLine] = field(default_factory=list)


class Seeder:
    def __init__(
        self,
        user_service: UserService,
        tag_service: TagService,
        pickup_line_service: PickupLineService,
        rng: random.Random | None = None,
    ):
        self.user_service = user_service
        self.tag_service = tag_service
        self.pickup_line_service = pickup_line_service
        self.rng = rng or random.Random()

    async def seed(self, data: SeedFile) -> list[SeededUser]:
        """Create every user with their content, then let each user react to everything they can see."""
        seeded = []
        for request in data.requests:
            user = await self.user_service.create(request.user)
            entry = SeededUser(user=user)
            for tag_request in request.tags:
                tag = await self.tag_service.create(tag_request, user.id)
                entry.tags[tag.name] = tag
            for line in request.pickup_lines:
                entry.pickup_lines.append(await self._add_pickup_line(line, entry))
            seeded.append(entry)
            logger.info(
                "Seeded %s with %s tags and %s pickup lines",
                user.username, len(entry.tags), len(entry.pickup_lines),
            )

        for reactor in seeded:
            for owner in seeded:
                for pickup_line in owner.pickup_lines:
                    if not (pickup_line.visible or pickup_line.user_id == reactor.user.id):
                        continue
                    await self.pickup_line_service.update_reaction_by_user(
                        pickup_line.id, reactor.user.id, self._random_reaction()
                    )
        return seeded

    async def _add_pickup_line(self, line: SeedPickupLine, entry: SeededUser) -> PickupLine:
        tag_ids = []
        for name in line.tags:
            tag = entry.tags.get(name)
            if tag is None:
                raise ValidationError(f"Could not find tag {name} for {entry.user.username}")
            tag_ids.append(tag.id)
        body = PickupLineCreateRequest(
            title=line.title, content=line.content, visible=line.visible, tags=tag_ids
        )
        return await self.pickup_line_service.create(body, entry.user)

    def _random_reaction(self) -> ReactionRequest:
        return ReactionRequest(
            starred=self.rng.random() < 0.5,
            vote=self.rng.choice(list(Vote)),
        )
