"""
Tests for the registration approval workflow.
"""
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from src.admin.service import ApprovalWorkflow
from src.auth.exceptions import (
    DuplicateAccountException,
    MissingFieldsException,
    PermissionDeniedException,
    ResourceNotFoundException,
    StatusConflictException,
)
from src.auth.models import AccountStatus, User, UserRole
from src.auth.schemas import SignupRequest
from src.config import settings
from src.core.audit_models import AuditLog
from src.exceptions import StoreWriteError
from src.realtime import events

pytestmark = pytest.mark.anyio


class RecordingDispatcher:
    """
    Records every notification together with what the store held at that moment.
    """

    def __init__(self, db, timeline=None):
        self.db = db
        self.timeline = timeline if timeline is not None else []
        self.calls = []

    def _snapshot(self, kind, target, event):
        user_id = event.payload.get("id", target)
        user = self.db.query(User).filter(User.id == int(user_id)).first() if user_id is not None else None
        self.calls.append({
            "kind": kind,
            "target": target,
            "event": event,
            "status": user.status if user else None,
            "audit_actions": [entry.action for entry in self.db.query(AuditLog).all()],
        })
        self.timeline.append(kind)
        return 1

    def broadcast_admin(self, event):
        return self._snapshot("notify admins", None, event)

    def notify_subject(self, subject_id, event):
        return self._snapshot("notify user", subject_id, event)


def _recording_mailer(timeline):
    async def mailer(to, subject, html):
        timeline.append("email")
        return True
    return AsyncMock(side_effect=mailer)


def _signup(**overrides):
    data = {
        "username": "dr.grey",
        "email": "grey@example.com",
        "password": "Password123!",
        "fullName": "Meredith Grey",
        "role": "doctor",
    }
    data.update(overrides)
    return SignupRequest(**data)


async def test_register_creates_pending_account(db):
    timeline = []
    dispatcher = RecordingDispatcher(db, timeline)
    mailer = _recording_mailer(timeline)

    user = await ApprovalWorkflow(db, dispatcher, mailer=mailer).register(_signup())

    assert user.status == AccountStatus.PENDING
    assert user.role == UserRole.DOCTOR
    assert user.password != "Password123!"
    assert timeline == ["email", "notify admins"]
    assert mailer.await_args.args[0] == settings.admin_email

    [call] = dispatcher.calls
    assert call["event"].name == events.NEW_PENDING_USER
    assert call["status"] == AccountStatus.PENDING
    assert call["audit_actions"] == ["SIGNUP"]


async def test_register_defaults_to_staff_role(db):
    user = await ApprovalWorkflow(db, RecordingDispatcher(db), mailer=AsyncMock()).register(_signup(role=None))

    assert user.role == UserRole.STAFF


@pytest.mark.parametrize("missing", ["username", "email", "password", "fullName"])
async def test_register_requires_every_field(db, missing):
    dispatcher = RecordingDispatcher(db)
    mailer = AsyncMock()

    with pytest.raises(MissingFieldsException):
        await ApprovalWorkflow(db, dispatcher, mailer=mailer).register(_signup(**{missing: ""}))

    assert db.query(User).count() == 0
    assert dispatcher.calls == []
    mailer.assert_not_called()


async def test_register_rejects_duplicates(db, pending_user):
    dispatcher = RecordingDispatcher(db)

    with pytest.raises(DuplicateAccountException):
        await ApprovalWorkflow(db, dispatcher, mailer=AsyncMock()).register(
            _signup(username=pending_user.username, email="fresh@example.com")
        )

    assert db.query(User).count() == 1
    assert dispatcher.calls == []


async def test_approve_commits_then_audits_emails_and_notifies(db, admin_user, pending_user):
    timeline = []
    dispatcher = RecordingDispatcher(db, timeline)
    mailer = _recording_mailer(timeline)

    user, changed = await ApprovalWorkflow(db, dispatcher, mailer=mailer).approve(pending_user.id, admin_user)

    assert changed is True
    assert user.status == AccountStatus.APPROVED
    assert user.approved_by == admin_user.username
    assert user.approved_at is not None
    assert timeline == ["email", "notify user", "notify admins"]
    assert mailer.await_args.args[0] == pending_user.email

    user_call, admin_call = dispatcher.calls
    assert user_call["target"] == pending_user.id
    assert user_call["event"].name == events.APPROVED
    assert admin_call["event"].payload == {"id": str(pending_user.id), "status": AccountStatus.APPROVED}
    # the store and the audit trail are updated before anyone is told
    for call in dispatcher.calls:
        assert call["status"] == AccountStatus.APPROVED
        assert call["audit_actions"] == ["APPROVED_USER"]

    entry = db.query(AuditLog).one()
    assert entry.user_id == admin_user.id
    assert entry.record_id == str(pending_user.id)
    assert entry.details == {"approvedUser": pending_user.email}


async def test_reject_carries_reason(db, admin_user, pending_user):
    dispatcher = RecordingDispatcher(db)
    mailer = AsyncMock(return_value=True)

    user, changed = await ApprovalWorkflow(db, dispatcher, mailer=mailer).reject(
        pending_user.id, admin_user, "Licence number missing"
    )

    assert changed is True
    assert user.status == AccountStatus.REJECTED
    user_call, admin_call = dispatcher.calls
    assert user_call["event"].payload["reason"] == "Licence number missing"
    assert admin_call["event"].payload["status"] == AccountStatus.REJECTED
    assert "Licence number missing" in mailer.await_args.args[2]
    assert db.query(AuditLog).one().details == {"reason": "Licence number missing"}


async def test_reject_without_reason_uses_default(db, admin_user, pending_user):
    dispatcher = RecordingDispatcher(db)

    await ApprovalWorkflow(db, dispatcher, mailer=AsyncMock()).reject(pending_user.id, admin_user)

    assert dispatcher.calls[0]["event"].payload["reason"] == "No reason provided"


async def test_repeating_a_decision_only_resends_events(db, admin_user, pending_user):
    dispatcher = RecordingDispatcher(db)
    mailer = AsyncMock(return_value=True)
    workflow = ApprovalWorkflow(db, dispatcher, mailer=mailer)
    await workflow.approve(pending_user.id, admin_user)
    dispatcher.calls.clear()
    mailer.reset_mock()

    user, changed = await workflow.approve(pending_user.id, admin_user)

    assert changed is False
    assert user.status == AccountStatus.APPROVED
    assert [(call["kind"], call["event"].name) for call in dispatcher.calls] == [
        ("notify user", events.APPROVED),
        ("notify admins", events.USER_STATUS_CHANGED),
    ]
    assert dispatcher.calls[1]["event"].payload == {"id": str(pending_user.id), "status": AccountStatus.APPROVED}
    mailer.assert_not_called()
    assert db.query(AuditLog).count() == 1


async def test_repeating_a_rejection_resends_rejected(db, admin_user, pending_user):
    dispatcher = RecordingDispatcher(db)
    mailer = AsyncMock(return_value=True)
    workflow = ApprovalWorkflow(db, dispatcher, mailer=mailer)
    await workflow.reject(pending_user.id, admin_user, "Incomplete form")
    dispatcher.calls.clear()
    mailer.reset_mock()

    user, changed = await workflow.reject(pending_user.id, admin_user, "Incomplete form")

    assert changed is False
    assert [call["event"].name for call in dispatcher.calls] == [events.REJECTED, events.USER_STATUS_CHANGED]
    assert dispatcher.calls[0]["event"].payload["reason"] == "Incomplete form"
    mailer.assert_not_called()
    assert db.query(AuditLog).count() == 1


async def test_failed_decision_write_rolls_back_silently(db, admin_user, pending_user):
    dispatcher = RecordingDispatcher(db)
    mailer = AsyncMock(return_value=True)

    with patch.object(db, "commit", side_effect=SQLAlchemyError("database is locked")):
        with pytest.raises(StoreWriteError):
            await ApprovalWorkflow(db, dispatcher, mailer=mailer).approve(pending_user.id, admin_user)

    db.refresh(pending_user)
    assert pending_user.status == AccountStatus.PENDING
    assert pending_user.approved_by is None
    assert dispatcher.calls == []
    mailer.assert_not_called()
    assert db.query(AuditLog).count() == 0


async def test_failed_signup_write_rolls_back_silently(db):
    dispatcher = RecordingDispatcher(db)
    mailer = AsyncMock(return_value=True)

    with patch.object(db, "commit", side_effect=SQLAlchemyError("disk I/O error")):
        with pytest.raises(StoreWriteError):
            await ApprovalWorkflow(db, dispatcher, mailer=mailer).register(_signup())

    assert db.query(User).count() == 0
    assert dispatcher.calls == []
    mailer.assert_not_called()
    assert db.query(AuditLog).count() == 0


async def test_opposite_decision_conflicts(db, admin_user, pending_user):
    dispatcher = RecordingDispatcher(db)
    workflow = ApprovalWorkflow(db, dispatcher, mailer=AsyncMock())
    await workflow.reject(pending_user.id, admin_user)
    dispatcher.calls.clear()

    with pytest.raises(StatusConflictException) as exc_info:
        await workflow.approve(pending_user.id, admin_user)

    assert exc_info.value.status_code == 409
    db.refresh(pending_user)
    assert pending_user.status == AccountStatus.REJECTED
    assert dispatcher.calls == []


async def test_non_admin_cannot_decide(db, make_user, pending_user):
    doctor = make_user("dr.house", role=UserRole.DOCTOR, status=AccountStatus.APPROVED)
    dispatcher = RecordingDispatcher(db)

    with pytest.raises(PermissionDeniedException):
        await ApprovalWorkflow(db, dispatcher, mailer=AsyncMock()).approve(pending_user.id, doctor)

    db.refresh(pending_user)
    assert pending_user.status == AccountStatus.PENDING
    assert db.query(AuditLog).count() == 0
    assert dispatcher.calls == []


async def test_unknown_user_is_not_found(db, admin_user):
    dispatcher = RecordingDispatcher(db)

    with pytest.raises(ResourceNotFoundException):
        await ApprovalWorkflow(db, dispatcher, mailer=AsyncMock()).reject(9999, admin_user)

    assert db.query(AuditLog).count() == 0
    assert dispatcher.calls == []


async def test_failing_email_does_not_block_notifications(db, admin_user, pending_user):
    dispatcher = RecordingDispatcher(db)
    mailer = AsyncMock(side_effect=RuntimeError("SMTP down"))

    user, changed = await ApprovalWorkflow(db, dispatcher, mailer=mailer).approve(pending_user.id, admin_user)

    assert changed is True
    assert [call["kind"] for call in dispatcher.calls] == ["notify user", "notify admins"]


async def test_failing_audit_does_not_block_notifications(db, admin_user, pending_user):
    dispatcher = RecordingDispatcher(db)

    with patch("src.admin.service.create_audit_log", side_effect=RuntimeError("audit store down")):
        user, changed = await ApprovalWorkflow(db, dispatcher, mailer=AsyncMock()).approve(
            pending_user.id, admin_user
        )

    assert changed is True
    assert user.status == AccountStatus.APPROVED
    assert [call["kind"] for call in dispatcher.calls] == ["notify user", "notify admins"]


async def test_default_mailer_skips_when_unconfigured(db, admin_user, pending_user):
    """
    Without SMTP settings the real mailer logs and returns instead of failing.
    """
    dispatcher = RecordingDispatcher(db)

    user, changed = await ApprovalWorkflow(db, dispatcher).approve(pending_user.id, admin_user)

    assert changed is True
    assert len(dispatcher.calls) == 2
