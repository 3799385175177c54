from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.invitation_issuer import InvitationIssuer
from portal.domain.activities import ClientRecovered
from portal.domain.entities import ClientActivity
from portal.libs.result import Error, Return
from tests.utils.factories import make_client


@pytest.fixture
def email_sender():
    sender = AsyncMock()
    sender.send.return_value = Return.ok("email-id")
    return sender


@pytest.mark.asyncio
async def test_issue_commits_before_sending(mock_uow, email_sender):
    client = make_client(email="Owner@Acme.com")

    dispatch = await InvitationIssuer(mock_uow, email_sender).issue(client)

    assert dispatch.dispatch_status == "sent"
    assert dispatch.warning is None
    assert dispatch.email == "owner@acme.com"

    invitation = mock_uow.invitations.create.call_args[0][0]
    to, subject, html = email_sender.send.call_args[0]
    assert to == "owner@acme.com"
    assert f"/setup?token={invitation.token}" in html
    assert mock_uow.commit.await_count == 2  # invitation, then activity


@pytest.mark.asyncio
async def test_email_failure_leaves_invitation_unnotified(mock_uow, email_sender):
    email_sender.send.return_value = Return.err(Error("EMAIL_TIMEOUT", "timed out"))

    dispatch = await InvitationIssuer(mock_uow, email_sender).issue(make_client())

    assert dispatch.dispatch_status == "unnotified"
    assert "resend" in dispatch.warning
    mock_uow.invitations.create.assert_awaited_once()
    activity = mock_uow.activities.create.call_args[0][0]
    assert activity.event_metadata["delivered"] is False


@pytest.mark.asyncio
async def test_activity_failure_is_swallowed_and_rolled_back(mock_uow):
    mock_uow.activities.create.side_effect = OperationalError("insert", {}, Exception("locked"))

    recorded = await ActivityRecorder(mock_uow).record(make_client().id, ClientRecovered())

    assert recorded is False
    mock_uow.rollback.assert_awaited_once()
    mock_uow.publish_change.assert_not_called()


@pytest.mark.asyncio
async def test_activity_is_published_after_commit(mock_uow):
    client_id = make_client().id

    recorded = await ActivityRecorder(mock_uow).record(client_id, ClientRecovered())

    assert recorded is True
    activity = mock_uow.activities.create.call_args[0][0]
    assert isinstance(activity, ClientActivity)
    assert activity.description == "was recovered from scheduled deletion"
    table, row = mock_uow.publish_change.call_args[0]
    assert table == "client_activities"
    assert row["client_id"] == str(client_id)
    mock_uow.commit.assert_awaited_once()
