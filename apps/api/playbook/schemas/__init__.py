from playbook.schemas.filters import PickupLineFilters, UserFilters
from playbook.schemas.tag import TagCreateRequest, TagUpdateRequest, TagResponse
from playbook.schemas.user import (
    UserCreateRequest,
    UserUpdateRequest,
    UserPasswordUpdateRequest,
    UserResponse,
    UserListResponse,
    LoginRequest,
    TokenResponse,
)
from playbook.schemas.pickup_line import (
    PickupLineCreateRequest,
    PickupLineUpdateRequest,
    ReactionRequest,
    ReactionResponse,
    StatisticsResponse,
    PickupLineResponse,
    PickupLineListResponse,
)

__all__ = [
    "PickupLineFilters",
    "UserFilters",
    "TagCreateRequest",
    "TagUpdateRequest",
    "TagResponse",
    "UserCreateRequest",
    "UserUpdateRequest",
    "UserPasswordUpdateRequest",
    "LoginRequest",
    "TokenResponse",
    "UserResponse",
    "UserListResponse",
    "PickupLineCreateRequest",
    "PickupLineUpdateRequest",
    "ReactionRequest",
    "ReactionResponse",
    "StatisticsResponse",
    "PickupLineResponse",
    "PickupLineListResponse",
]
