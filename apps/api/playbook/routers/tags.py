from fastapi import APIRouter, Depends, status

from playbook.db.models import User
from playbook.dependencies import get_current_user, get_tag_service
from playbook.schemas import TagCreateRequest, TagResponse, TagUpdateRequest
from playbook.serializers import tag_to_response
from playbook.services import TagService

router = APIRouter(prefix="/tags", tags=["tags"])


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    body: TagCreateRequest,
    current_user: User = Depends(get_current_user),
    service: TagService = Depends(get_tag_service),
):
    return tag_to_response(await service.create(body, current_user.id))


@router.get("", response_model=list[TagResponse])
async def list_tags(
    current_user: User = Depends(get_current_user),
    service: TagService = Depends(get_tag_service),
):
    return [tag_to_response(t) for t in await service.get_list_by_user_id(current_user.id)]


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: str,
    body: TagUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: TagService = Depends(get_tag_service),
):
    return tag_to_response(await service.update(tag_id, body, current_user.id))


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: str,
    current_user: User = Depends(get_current_user),
    service: TagService = Depends(get_tag_service),
):
    await service.delete(tag_id, current_user.id)
