"""Resource-level authorization tests."""

import pytest

from pointage.auth.authorization import AuthorizationService
from pointage.auth.exceptions import NotFoundError, UnauthorizedError
from pointage.auth.models import Action, AuthProfile

ALICE = AuthProfile(security_id="1", name="alice", id=1)


@pytest.mark.asyncio
async def test_app_read_allowed_anonymously(entities):
    authz = AuthorizationService(entities)
    await authz.authorize("App", 0, "read")
    assert entities.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("action", ["create", "update", "delete"])
async def test_app_write_needs_profile(entities, action):
    authz = AuthorizationService(entities)
    with pytest.raises(UnauthorizedError) as exc:
        await authz.authorize("App", 0, action)
    assert exc.value.status_code == 401
    assert entities.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("action", [Action.CREATE, Action.UPDATE, Action.DELETE])
async def test_resource_write_needs_profile(entities, action):
    entities.rows[("Employee", 1)] = object()
    authz = AuthorizationService(entities)
    with pytest.raises(UnauthorizedError):
        await authz.authorize("Employee", 1, action)


@pytest.mark.asyncio
async def test_missing_resource_is_not_found(entities):
    authz = AuthorizationService(entities, current_user=ALICE)
    with pytest.raises(NotFoundError) as exc:
        await authz.authorize("Employee", 999, "read")
    assert str(exc.value) == "Employee with id 999 not found"
    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_anonymous_read_of_missing_resource_is_not_found(entities):
    authz = AuthorizationService(entities)
    with pytest.raises(NotFoundError):
        await authz.authorize("Check", 3, "read")


@pytest.mark.asyncio
async def test_anonymous_read_of_existing_resource_allowed(entities):
    entities.rows[("Employee", 1)] = object()
    await AuthorizationService(entities).authorize("Employee", 1)


@pytest.mark.asyncio
@pytest.mark.parametrize("action", list(Action))
async def test_authenticated_any_action_on_existing_resource(entities, action):
    entities.rows[("Check", 4)] = object()
    authz = AuthorizationService(entities, current_user=ALICE)
    await authz.authorize("Check", 4, action)
    assert entities.calls == [("Check", 4)]


@pytest.mark.asyncio
async def test_one_lookup_per_call_and_idempotent(entities):
    entities.rows[("Employee", 2)] = object()
    authz = AuthorizationService(entities, current_user=ALICE)

    await authz.authorize("Employee", 2, "update")
    await authz.authorize("Employee", 2, "update")
    assert entities.calls == [("Employee", 2), ("Employee", 2)]

    for _ in range(2):
        with pytest.raises(NotFoundError):
            await authz.authorize("Employee", 3, "update")


@pytest.mark.asyncio
async def test_unknown_action_rejected(entities):
    with pytest.raises(ValueError):
        await AuthorizationService(entities, current_user=ALICE).authorize("Employee", 1, "approve")
