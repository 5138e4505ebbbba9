"""User account flows and the user index."""

import pytest

from playbook.core.errors import ExternalStoreUnavailableError, NotFoundError, ValidationError
from playbook.schemas import PickupLineCreateRequest, UserCreateRequest, UserFilters


async def register(user_service, username="carol@example.com", password="hunter2", display_name=None):
    return await user_service.create(
        UserCreateRequest(username=username, password=password, display_name=display_name)
    )


async def test_username_must_be_an_email(user_service):
    with pytest.raises(ValidationError):
        await register(user_service, username="carol")


async def test_display_name_defaults_to_username(user_service, search_client, settings):
    user = await register(user_service)

    assert user.display_name == "carol@example.com"
    assert user.hashed_password != "hunter2"
    document = search_client.documents(settings.user_index_name)[user.id]
    assert document["username"] == "carol@example.com"


async def test_duplicate_username_is_rejected(user_service):
    await register(user_service)
    with pytest.raises(ValidationError):
        await register(user_service)


async def test_index_failure_removes_row(user_service, search_client):
    search_client.fail_on("index")
    with pytest.raises(ExternalStoreUnavailableError):
        await register(user_service)
    assert await user_service.get_by_username("carol@example.com") is None


async def test_login(user_service):
    user = await register(user_service)
    assert (await user_service.login("carol@example.com", "hunter2")).id == user.id
    assert await user_service.login("carol@example.com", "wrong") is None
    assert await user_service.login("nobody@example.com", "hunter2") is None


async def test_password_and_display_name_updates(user_service):
    user = await register(user_service)

    await user_service.update_password(user.id, "s3cret")
    await user_service.update_display_name(user.id, "Carol")

    assert await user_service.login("carol@example.com", "hunter2") is None
    assert (await user_service.login("carol@example.com", "s3cret")).display_name == "Carol"


async def test_get_by_id_missing(user_service):
    with pytest.raises(NotFoundError):
        await user_service.get_by_id("00000000-0000-0000-0000-000000000000")


async def test_delete_purges_documents(user_service, pickup_line_service, search_client, settings, bob):
    user = await register(user_service)
    await pickup_line_service.create(PickupLineCreateRequest(title="mine", visible=True), user)
    kept = await pickup_line_service.create(PickupLineCreateRequest(title="theirs", visible=True), bob)

    await user_service.delete(user)

    assert list(search_client.documents(settings.pickup_line_index_name)) == [kept.id]
    assert user.id not in search_client.documents(settings.user_index_name)
    assert await user_service.get_by_username("carol@example.com") is None


async def test_search_users_by_username_prefix(user_service):
    carol = await register(user_service)
    await register(user_service, username="dave@example.com")

    result = await user_service.search_users(UserFilters(username="car"))

    assert result.total == 1
    assert [u.id for u in result.users] == [carol.id]
