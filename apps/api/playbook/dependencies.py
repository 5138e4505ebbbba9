from typing import Annotated, AsyncGenerator, Optional

from elasticsearch import AsyncElasticsearch
from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from playbook.core import decode_access_token, get_settings
from playbook.db.models import User
from playbook.db.session import async_session
from playbook.domain import SortingType, Visibility
from playbook.repositories import PickupLineRepository, TagRepository, UserRepository
from playbook.schemas import PickupLineFilters, UserFilters
from playbook.search import ElasticSearchWrapper, SearchResultMapper
from playbook.services import PickupLineService, TagService, UserService
from playbook.utils import parse_uuid

security = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_search_client(request: Request) -> AsyncElasticsearch:
    return request.app.state.search_client


def get_search(
    db: Annotated[AsyncSession, Depends(get_db)],
    client: Annotated[AsyncElasticsearch, Depends(get_search_client)],
) -> ElasticSearchWrapper:
    mapper = SearchResultMapper(TagRepository(db), PickupLineRepository(db))
    return ElasticSearchWrapper(client, mapper, get_settings())


def get_pickup_line_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    search: Annotated[ElasticSearchWrapper, Depends(get_search)],
) -> PickupLineService:
    return PickupLineService(PickupLineRepository(db), TagRepository(db), search)


def get_tag_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    search: Annotated[ElasticSearchWrapper, Depends(get_search)],
) -> TagService:
    return TagService(TagRepository(db), search)


def get_user_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    search: Annotated[ElasticSearchWrapper, Depends(get_search)],
) -> UserService:
    return UserService(UserRepository(db), search)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
    token: Annotated[Optional[str], Query(include_in_schema=False)] = None,
) -> User:
    """Authenticated user from the bearer header or the ?token= query param."""
    raw_token = credentials.credentials if credentials else token
    if not raw_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id = decode_access_token(raw_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user = await UserRepository(db).get_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_pickup_line_filters(
    page: int = Query(0, ge=0),
    title: Optional[str] = None,
    content: Optional[str] = None,
    tags: Optional[list[str]] = Query(None),
    starred: bool = False,
    only_upvoted: bool = False,
    visibility: Optional[Visibility] = None,
    success_percentage: float = Query(0.0, ge=0.0, le=1.0),
    user_id: Optional[str] = None,
    sorting_type: Optional[SortingType] = None,
    match_all_tags: bool = False,
) -> PickupLineFilters:
    """Parse pickup line search query params; tags may repeat (?tags=a&tags=b)."""
    if user_id is not None:
        parsed = parse_uuid(user_id)
        if parsed is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="user_id must be a UUID",
            )
        user_id = parsed
    return PickupLineFilters(
        page=page,
        title=title,
        content=content,
        tags=tags or [],
        starred=starred,
        only_upvoted=only_upvoted,
        visibility=visibility,
        success_percentage=success_percentage,
        user_id=user_id,
        sorting_type=sorting_type,
        match_all_tags=match_all_tags,
    )


def get_user_filters(
    page: int = Query(0, ge=0),
    username: Optional[str] = None,
    display_name: Optional[str] = None,
) -> UserFilters:
    return UserFilters(page=page, username=username, display_name=display_name)
