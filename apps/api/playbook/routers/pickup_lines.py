from fastapi import APIRouter, Depends, Request, status

from playbook.core import get_settings, limiter
from playbook.db.models import User
from playbook.dependencies import get_current_user, get_pickup_line_filters, get_pickup_line_service
from playbook.schemas import (
    PickupLineCreateRequest,
    PickupLineFilters,
    PickupLineListResponse,
    PickupLineResponse,
    PickupLineUpdateRequest,
    ReactionRequest,
    ReactionResponse,
)
from playbook.serializers import pickup_line_to_response
from playbook.services import PickupLineService

router = APIRouter(prefix="/pickup-lines", tags=["pickup-lines"])

_search_rate_limit = get_settings().search_rate_limit


@router.post("", response_model=PickupLineResponse, status_code=status.HTTP_201_CREATED)
async def create_pickup_line(
    body: PickupLineCreateRequest,
    current_user: User = Depends(get_current_user),
    service: PickupLineService = Depends(get_pickup_line_service),
):
    pickup_line = await service.create(body, current_user)
    return pickup_line_to_response(pickup_line)


@router.get("", response_model=PickupLineListResponse)
@limiter.limit(_search_rate_limit)
async def list_pickup_lines(
    request: Request,
    filters: PickupLineFilters = Depends(get_pickup_line_filters),
    current_user: User = Depends(get_current_user),
    service: PickupLineService = Depends(get_pickup_line_service),
):
    return await service.get_list(current_user.id, filters)


@router.get("/feed", response_model=PickupLineListResponse)
@limiter.limit(_search_rate_limit)
async def get_feed(
    request: Request,
    filters: PickupLineFilters = Depends(get_pickup_line_filters),
    current_user: User = Depends(get_current_user),
    service: PickupLineService = Depends(get_pickup_line_service),
):
    return await service.get_feed(current_user.id, filters)


@router.get("/{pickup_line_id}", response_model=PickupLineResponse)
async def get_pickup_line(
    pickup_line_id: str,
    current_user: User = Depends(get_current_user),
    service: PickupLineService = Depends(get_pickup_line_service),
):
    return await service.get_detail(pickup_line_id, current_user.id)


@router.put("/{pickup_line_id}", response_model=PickupLineResponse)
async def update_pickup_line(
    pickup_line_id: str,
    body: PickupLineUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: PickupLineService = Depends(get_pickup_line_service),
):
    pickup_line = await service.update(pickup_line_id, body, current_user.id)
    return pickup_line_to_response(pickup_line)


@router.delete("/{pickup_line_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pickup_line(
    pickup_line_id: str,
    current_user: User = Depends(get_current_user),
    service: PickupLineService = Depends(get_pickup_line_service),
):
    await service.delete(pickup_line_id, current_user.id)


@router.put("/{pickup_line_id}/reaction", response_model=ReactionResponse)
async def update_reaction(
    pickup_line_id: str,
    body: ReactionRequest,
    current_user: User = Depends(get_current_user),
    service: PickupLineService = Depends(get_pickup_line_service),
):
    return await service.update_reaction_by_user(pickup_line_id, current_user.id, body)
