from fastapi import APIRouter, Depends, HTTPException, Request, status

from playbook.core import create_access_token, get_settings, limiter
from playbook.db.models import User
from playbook.dependencies import get_current_user, get_user_filters, get_user_service
from playbook.schemas import (
    LoginRequest,
    TokenResponse,
    UserCreateRequest,
    UserFilters,
    UserListResponse,
    UserPasswordUpdateRequest,
    UserResponse,
    UserUpdateRequest,
)
from playbook.serializers import user_to_response
from playbook.services import UserService

router = APIRouter(prefix="/user", tags=["user"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreateRequest,
    service: UserService = Depends(get_user_service),
):
    return user_to_response(await service.create(body))


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    service: UserService = Depends(get_user_service),
):
    user = await service.login(body.username, body.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = create_access_token(
        subject=str(user.id), username=user.username, display_name=user.display_name
    )
    return TokenResponse(access_token=token)


@router.get("", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    return user_to_response(current_user)


@router.patch("/display-name", response_model=UserResponse)
async def update_display_name(
    body: UserUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return user_to_response(await service.update_display_name(current_user.id, body.display_name))


@router.patch("/password", response_model=UserResponse)
async def update_password(
    body: UserPasswordUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return user_to_response(await service.update_password(current_user.id, body.password))


@router.get("/search", response_model=UserListResponse)
@limiter.limit(get_settings().search_rate_limit)
async def search_users(
    request: Request,
    filters: UserFilters = Depends(get_user_filters),
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.search_users(filters)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.delete(current_user)
