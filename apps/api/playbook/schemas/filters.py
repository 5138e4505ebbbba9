"""Already-parsed search filters handed to the search layer."""

from typing import Optional

from pydantic import BaseModel, Field

from playbook.domain import SortingType, Visibility


class PickupLineFilters(BaseModel):
    page: int = Field(default=0, ge=0)
    title: Optional[str] = None
    content: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    starred: bool = False
    only_upvoted: bool = False
    visibility: Optional[Visibility] = None
    success_percentage: float = Field(default=0.0, ge=0.0, le=1.0)
    user_id: Optional[str] = None
    sorting_type: Optional[SortingType] = None
    # Tags become non-scoring term filters instead of relevance should clauses
    match_all_tags: bool = False


class UserFilters(BaseModel):
    page: int = Field(default=0, ge=0)
    username: Optional[str] = None
    display_name: Optional[str] = None
