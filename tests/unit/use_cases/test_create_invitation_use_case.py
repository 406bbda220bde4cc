from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.unit.factories import make_connection, make_invitation
from underneath.app.use_cases.invitations import (
    CreateInvitationCommand,
    CreateInvitationUseCase,
)
from underneath.app.use_cases.invitations.codes import CODE_ALPHABET
from underneath.domain.validation import is_valid_invitation_code


@pytest.fixture
def email_sender():
    sender = MagicMock()
    sender.send_invitation_email = AsyncMock(return_value=True)
    return sender


@pytest.fixture
def ready_uow(mock_uow, dom):
    mock_uow.users.get_by_id.return_value = dom
    mock_uow.connections.get_active_by_dom.return_value = None
    mock_uow.invitations.get_active_by_dom_and_email.return_value = None
    mock_uow.invitations.code_exists.return_value = False
    return mock_uow


@pytest.mark.asyncio
async def test_create_invitation_issues_code_and_sends_email(ready_uow, dom, email_sender):
    use_case = CreateInvitationUseCase(ready_uow, email_sender)

    result = await use_case.execute(
        CreateInvitationCommand(dom_id=str(dom.id), email="pet@example.com", message="Hi")
    )

    assert result.is_ok()
    data = result.value
    assert is_valid_invitation_code(data.code)
    assert all(c in CODE_ALPHABET for c in data.code)
    assert data.is_active is True
    assert data.email_sent is True

    created = ready_uow.invitations.create.call_args[0][0]
    assert created.dom_id == dom.id
    assert abs(created.expires_at - created.created_at - timedelta(hours=48)) < timedelta(seconds=5)
    ready_uow.commit.assert_called_once()
    email_sender.send_invitation_email.assert_awaited_once_with(
        "pet@example.com", data.code, "Master", "Hi"
    )


@pytest.mark.asyncio
async def test_create_invitation_without_email_skips_sending(ready_uow, dom, email_sender):
    use_case = CreateInvitationUseCase(ready_uow, email_sender)

    result = await use_case.execute(CreateInvitationCommand(dom_id=str(dom.id)))

    assert result.is_ok()
    assert result.value.email_sent is False
    email_sender.send_invitation_email.assert_not_called()


@pytest.mark.asyncio
async def test_email_failure_keeps_invitation(ready_uow, dom, email_sender):
    email_sender.send_invitation_email.side_effect = RuntimeError("smtp down")
    use_case = CreateInvitationUseCase(ready_uow, email_sender)

    result = await use_case.execute(
        CreateInvitationCommand(dom_id=str(dom.id), email="pet@example.com")
    )

    assert result.is_ok()
    assert result.value.email_sent is False
    ready_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_custom_validity_window(ready_uow, dom, email_sender):
    use_case = CreateInvitationUseCase(ready_uow, email_sender)

    await use_case.execute(CreateInvitationCommand(dom_id=str(dom.id), valid_hours=2))

    created = ready_uow.invitations.create.call_args[0][0]
    assert abs(created.expires_at - created.created_at - timedelta(hours=2)) < timedelta(seconds=5)


@pytest.mark.asyncio
async def test_default_validity_window(ready_uow, dom, email_sender):
    use_case = CreateInvitationUseCase(ready_uow, email_sender)

    await use_case.execute(CreateInvitationCommand(dom_id=str(dom.id)))

    created = ready_uow.invitations.create.call_args[0][0]
    assert abs(created.expires_at - created.created_at - timedelta(hours=48)) < timedelta(seconds=5)


@pytest.mark.asyncio
async def test_zero_validity_is_rejected(mock_uow, dom, email_sender):
    use_case = CreateInvitationUseCase(mock_uow, email_sender)

    result = await use_case.execute(CreateInvitationCommand(dom_id=str(dom.id), valid_hours=0))

    assert result.error.code == "VALIDATION_FAILED"
    assert result.error.details == ["Validity must be at least one hour"]
    mock_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_collision_regenerates_code(ready_uow, dom, email_sender):
    ready_uow.invitations.code_exists.side_effect = [True, True, False]
    use_case = CreateInvitationUseCase(ready_uow, email_sender)

    result = await use_case.execute(CreateInvitationCommand(dom_id=str(dom.id)))

    assert result.is_ok()
    assert ready_uow.invitations.code_exists.await_count == 3


@pytest.mark.asyncio
async def test_code_generation_gives_up(ready_uow, dom, email_sender):
    ready_uow.invitations.code_exists.return_value = True
    use_case = CreateInvitationUseCase(ready_uow, email_sender)

    result = await use_case.execute(CreateInvitationCommand(dom_id=str(dom.id)))

    assert result.is_err()
    assert result.error.code == "CODE_GENERATION_FAILED"
    ready_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_input_reports_all_violations(mock_uow, dom, email_sender):
    use_case = CreateInvitationUseCase(mock_uow, email_sender)

    result = await use_case.execute(
        CreateInvitationCommand(
            dom_id=str(dom.id), email="not-an-email", message="x" * 501
        )
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_FAILED"
    assert len(result.error.details) == 2
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_non_dom_cannot_invite(ready_uow, sub, email_sender):
    ready_uow.users.get_by_id.return_value = sub
    use_case = CreateInvitationUseCase(ready_uow, email_sender)

    result = await use_case.execute(CreateInvitationCommand(dom_id=str(sub.id)))

    assert result.is_err()
    assert result.error.code == "NOT_A_DOM"


@pytest.mark.asyncio
async def test_connected_dom_cannot_invite(ready_uow, dom, sub, email_sender):
    ready_uow.connections.get_active_by_dom.return_value = make_connection(dom.id, sub.id)
    use_case = CreateInvitationUseCase(ready_uow, email_sender)

    result = await use_case.execute(CreateInvitationCommand(dom_id=str(dom.id)))

    assert result.is_err()
    assert result.error.code == "DOM_ALREADY_CONNECTED"
    ready_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_duplicate_active_invitation_for_email(ready_uow, dom, email_sender):
    ready_uow.invitations.get_active_by_dom_and_email.return_value = make_invitation(
        dom.id, email="pet@example.com"
    )
    use_case = CreateInvitationUseCase(ready_uow, email_sender)

    result = await use_case.execute(
        CreateInvitationCommand(dom_id=str(dom.id), email="pet@example.com")
    )

    assert result.is_err()
    assert result.error.code == "INVITATION_EXISTS"
