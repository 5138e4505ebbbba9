from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCreateRequest(BaseModel):
    username: str
    password: str = Field(..., min_length=1)
    display_name: Optional[str] = None


class UserUpdateRequest(BaseModel):
    display_name: str = Field(..., min_length=1, max_length=255)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    display_name: Optional[str] = None


class UserListResponse(BaseModel):
    total: int
    page: int
    users: list[UserResponse]


class UserPasswordUpdateRequest(BaseModel):
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
