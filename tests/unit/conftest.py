from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.unit.factories import make_user
from underneath.domain.entities import UserRole

REPOSITORY_METHODS = {
    "users": ["get_by_email", "get_by_id", "create", "update"],
    "sessions": ["get_by_token_hash", "create", "update"],
    "invitations": [
        "get_by_id",
        "get_by_code",
        "code_exists",
        "get_active_by_dom_and_email",
        "list_for_dom",
        "create",
        "update",
    ],
    "connections": [
        "get_by_id",
        "get_active_by_user",
        "get_active_by_dom",
        "get_active_by_sub",
        "list_all",
        "count_all",
        "create",
        "update",
    ],
    "stages": [
        "get_by_id",
        "get_by_number",
        "get_all",
        "get_sub_active",
        "deactivate_sub_active_except",
        "create",
        "update",
        "delete",
    ],
    "stage_entities": ["create", "count_by_from_stage", "get_visible_at"],
    "point_accounts": ["get_by_user_id", "create", "update"],
    "profiles": ["get_by_user_id", "create", "update"],
}


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with every repository method as an AsyncMock"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    for repository, methods in REPOSITORY_METHODS.items():
        repo = MagicMock()
        for method in methods:
            setattr(repo, method, AsyncMock())
        setattr(uow, repository, repo)

    # create/update hand back what they were given
    for repository in (
        "users", "invitations", "connections", "stages", "stage_entities", "point_accounts", "profiles"
    ):
        getattr(uow, repository).create.side_effect = lambda obj: obj
    for repository in (
        "users", "invitations", "connections", "stages", "point_accounts", "sessions", "profiles"
    ):
        getattr(uow, repository).update.side_effect = lambda obj: obj

    return uow


@pytest.fixture
def dom():
    return make_user(UserRole.DOM, "dom@example.com", "Master")


@pytest.fixture
def sub():
    return make_user(UserRole.SUB, "sub@example.com", "Pet")
