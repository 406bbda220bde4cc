from datetime import timedelta

import pytest

from tests.unit.factories import make_connection, make_invitation, make_user
from underneath.app.use_cases.invitations import (
    AcceptInvitationUseCase,
    ValidateInvitationUseCase,
)
from underneath.domain.base import utcnow
from underneath.domain.entities import ConnectionStatus, UserRole
from underneath.domain.exceptions import ActiveConnectionExists


@pytest.fixture
def invitation(dom):
    return make_invitation(dom.id)


@pytest.fixture
def ready_uow(mock_uow, dom, sub, invitation):
    users = {dom.id: dom, sub.id: sub}
    mock_uow.users.get_by_id.side_effect = lambda user_id: users.get(user_id)
    mock_uow.invitations.get_by_code.return_value = invitation
    mock_uow.connections.get_active_by_dom.return_value = None
    mock_uow.connections.get_active_by_sub.return_value = None
    return mock_uow


@pytest.mark.asyncio
async def test_accept_creates_connection_and_consumes_invitation(ready_uow, dom, sub, invitation):
    use_case = AcceptInvitationUseCase(ready_uow)

    result = await use_case.execute("ABCD1234", sub.id)

    assert result.is_ok()
    data = result.value
    assert data.success is True
    assert data.connection.status == "ACTIVE"
    assert data.connection.partner.id == str(dom.id)
    assert data.connection.partner.role == "DOM"

    assert invitation.is_active is False
    assert invitation.accepted_by_id == sub.id
    assert invitation.accepted_at is not None

    connection = ready_uow.connections.create.call_args[0][0]
    assert connection.dom_id == dom.id
    assert connection.sub_id == sub.id
    assert connection.status == ConnectionStatus.ACTIVE
    ready_uow.commit.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("code", ["abcd1234", "SHORT", "ABCD-234"])
async def test_malformed_code(mock_uow, sub, code):
    result = await AcceptInvitationUseCase(mock_uow).execute(code, sub.id)

    assert result.is_err()
    assert result.error.code == "INVALID_CODE"
    mock_uow.invitations.get_by_code.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_code(ready_uow, sub):
    ready_uow.invitations.get_by_code.return_value = None

    result = await AcceptInvitationUseCase(ready_uow).execute("ZZZZ9999", sub.id)

    assert result.is_err()
    assert result.error.code == "INVALID_CODE"


@pytest.mark.asyncio
async def test_consumed_code(ready_uow, sub, invitation):
    invitation.is_active = False

    result = await AcceptInvitationUseCase(ready_uow).execute("ABCD1234", sub.id)

    assert result.is_err()
    assert result.error.code == "INVITATION_ALREADY_USED"


@pytest.mark.asyncio
async def test_expired_code(ready_uow, sub, invitation):
    invitation.expires_at = utcnow() - timedelta(minutes=1)

    result = await AcceptInvitationUseCase(ready_uow).execute("ABCD1234", sub.id)

    assert result.is_err()
    assert result.error.code == "INVITATION_EXPIRED"
    ready_uow.connections.create.assert_not_called()


@pytest.mark.asyncio
async def test_redeemer_must_be_sub(ready_uow, dom):
    result = await AcceptInvitationUseCase(ready_uow).execute("ABCD1234", dom.id)

    assert result.is_err()
    assert result.error.code == "INVALID_SUB"


@pytest.mark.asyncio
async def test_inviter_must_still_be_dom(mock_uow, sub):
    observer = make_user(UserRole.OBSERVER)
    users = {observer.id: observer, sub.id: sub}
    mock_uow.users.get_by_id.side_effect = lambda user_id: users.get(user_id)
    mock_uow.invitations.get_by_code.return_value = make_invitation(observer.id)

    result = await AcceptInvitationUseCase(mock_uow).execute("ABCD1234", sub.id)

    assert result.is_err()
    assert result.error.code == "INVALID_DOM"


@pytest.mark.asyncio
async def test_dom_already_connected(ready_uow, dom, sub):
    ready_uow.connections.get_active_by_dom.return_value = make_connection(
        dom.id, make_user(UserRole.SUB).id
    )

    result = await AcceptInvitationUseCase(ready_uow).execute("ABCD1234", sub.id)

    assert result.is_err()
    assert result.error.code == "DOM_ALREADY_CONNECTED"


@pytest.mark.asyncio
async def test_sub_already_connected(ready_uow, sub):
    ready_uow.connections.get_active_by_sub.return_value = make_connection(
        make_user(UserRole.DOM).id, sub.id
    )

    result = await AcceptInvitationUseCase(ready_uow).execute("ABCD1234", sub.id)

    assert result.is_err()
    assert result.error.code == "SUB_ALREADY_CONNECTED"
    ready_uow.invitations.update.assert_not_called()


@pytest.mark.asyncio
async def test_lost_race_is_reported_by_role(ready_uow, dom, sub):
    """Insert rejected by the database after the pre-checks passed"""
    other_sub = make_user(UserRole.SUB)
    ready_uow.connections.create.side_effect = ActiveConnectionExists("unique")
    ready_uow.connections.get_active_by_dom.side_effect = [
        None,
        make_connection(dom.id, other_sub.id),
    ]

    result = await AcceptInvitationUseCase(ready_uow).execute("ABCD1234", sub.id)

    assert result.is_err()
    assert result.error.code == "DOM_ALREADY_CONNECTED"
    ready_uow.rollback.assert_called_once()
    ready_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_validate_returns_summary(ready_uow, dom, invitation):
    result = await ValidateInvitationUseCase(ready_uow).execute("ABCD1234")

    assert result.is_ok()
    assert result.value.is_valid is True
    assert result.value.invitation.dom_id == str(dom.id)
    assert result.value.invitation.dom_display_name == "Master"
    # Validation never consumes
    assert invitation.is_active is True
    ready_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_validate_error_codes(ready_uow, invitation):
    use_case = ValidateInvitationUseCase(ready_uow)

    assert (await use_case.execute("bad")).error.code == "INVALID_CODE"

    invitation.expires_at = utcnow() - timedelta(seconds=1)
    assert (await use_case.execute("ABCD1234")).error.code == "INVITATION_EXPIRED"

    invitation.is_active = False
    assert (await use_case.execute("ABCD1234")).error.code == "INVITATION_ALREADY_USED"

    ready_uow.invitations.get_by_code.return_value = None
    assert (await use_case.execute("ABCD1234")).error.code == "INVITATION_NOT_FOUND"
