from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from playbook.domain import Vote
from playbook.schemas.tag import TagResponse
from playbook.schemas.user import UserResponse


class PickupLineCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = ""
    visible: bool = False
    tags: list[str] = Field(default_factory=list)


class PickupLineUpdateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = ""
    visible: bool = False
    tags: list[str] = Field(default_factory=list)


class ReactionRequest(BaseModel):
    starred: bool = False
    vote: Vote = Vote.NONE


class ReactionResponse(BaseModel):
    starred: bool = False
    vote: Vote = Vote.NONE


class StatisticsResponse(BaseModel):
    number_of_successes: int = 0
    number_of_failures: int = 0
    number_of_tries: int = 0
    success_percentage: float = 0.0


class PickupLineResponse(BaseModel):
    id: str
    title: str
    content: str
    visible: bool
    tags: list[TagResponse] = Field(default_factory=list)
    statistics: StatisticsResponse = Field(default_factory=StatisticsResponse)
    reaction: ReactionResponse = Field(default_factory=ReactionResponse)
    updated_at: Optional[datetime] = None
    user: Optional[UserResponse] = None


class PickupLineListResponse(BaseModel):
    total: int
    page: int
    pickup_lines: list[PickupLineResponse]
