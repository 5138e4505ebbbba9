"""User registration, login and deletion across the relational store and the user index."""

import logging
from typing import Optional

from pydantic import EmailStr, TypeAdapter, ValidationError as PydanticValidationError

from playbook.core.auth import hash_password, verify_password
from playbook.core.errors import NotFoundError, ValidationError
from playbook.db.models import User
from playbook.repositories import UserRepository
from playbook.schemas import UserCreateRequest, UserFilters, UserListResponse
from playbook.search import ElasticSearchWrapper
from playbook.services.saga import Saga

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


def validate_username(username: str) -> str:
    """Usernames are e-mail addresses."""
    try:
        return _email_adapter.validate_python(username)
    except PydanticValidationError as e:
        raise ValidationError("Username is not valid", cause=e) from e


class UserService:
    def __init__(self, user_repository: UserRepository, search: ElasticSearchWrapper):
        self.user_repository = user_repository
        self.search = search

    async def create(self, body: UserCreateRequest) -> User:
        username = validate_username(body.username)
        if await self.user_repository.get_by_username(username):
            raise ValidationError("Username is already taken")
        user = User(
            username=username,
            display_name=body.display_name or username,
            hashed_password=hash_password(body.password),
        )
        saga = Saga("create user")
        await saga.step(
            "insert user",
            lambda: self.user_repository.create(user),
            lambda: self.user_repository.delete(user),
        )
        await saga.step("index user", lambda: self.search.index_user(user))
        logger.info("Created user %s", user.id)
        return user

    async def get_by_id(self, user_id: str) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self.user_repository.get_by_username(username)

    async def login(self, username: str, password: str) -> Optional[User]:
        """The user when the credentials match, else None."""
        user = await self.user_repository.get_by_username(username)
        if user is None or not verify_password(password, user.hashed_password):
            return None
        return user

    async def update_display_name(self, user_id: str, display_name: str) -> User:
        # Relational only; the user document keeps the old display name until reindexed.
        user = await self.get_by_id(user_id)
        user.display_name = display_name
        return await self.user_repository.update(user)

    async def update_password(self, user_id: str, password: str) -> User:
        user = await self.get_by_id(user_id)
        user.hashed_password = hash_password(password)
        return await self.user_repository.update(user)

    async def delete(self, user: User) -> None:
        """Relational delete cascades to the user's rows; then purge the projection."""
        user_id = user.id
        await self.user_repository.delete(user)
        await self.search.delete_user_pickup_lines(user_id)
        await self.search.delete_user(user_id)
        logger.info("Deleted user %s", user_id)

    async def search_users(self, filters: UserFilters) -> UserListResponse:
        return await self.search.search_users(filters)
