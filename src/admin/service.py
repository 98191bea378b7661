"""
Registration approval workflow.

Accounts move ``pending -> approved`` or ``pending -> rejected``; both end
states are terminal. Every change is committed to the store first; the
audit entry, the email and the push notifications follow as post-commit
steps, in that order, and none of them can fail the request. Repeating a
decision only repeats the push notifications.
"""
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, Tuple

from fastapi import Request
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..auth.exceptions import (
    DuplicateAccountException,
    MissingFieldsException,
    PermissionDeniedException,
    ResourceNotFoundException,
    StatusConflictException,
)
from ..auth.models import AccountStatus, User, UserRole
from ..auth.schemas import SignupRequest
from ..auth.utils import approval_email, registration_request_email, rejection_email, send_email
from ..config import settings
from ..core.audit_models import AuditAction
from ..core.audit_service import create_audit_log
from ..core.security import hash_password
from ..exceptions import StoreWriteError
from ..realtime import events
from ..realtime.dispatcher import EventDispatcher
from .hooks import PostCommitHooks

logger = logging.getLogger(__name__)

Mailer = Callable[[str, str, str], Awaitable[bool]]

DEFAULT_REJECTION_REASON = "No reason provided"


class ApprovalWorkflow:
    """
    Creates pending accounts and applies admin decisions to them.

    Args:
        db: Database session for the current request
        dispatcher: Push dispatcher notifying admins and the affected user
        request: Current request, used for the audit IP address
        mailer: Coroutine ``(to, subject, html)`` used for notification emails
    """

    def __init__(
        self,
        db: Session,
        dispatcher: EventDispatcher,
        request: Optional[Request] = None,
        mailer: Optional[Mailer] = None,
    ):
        self.db = db
        self.dispatcher = dispatcher
        self.request = request
        self.mailer = mailer or send_email

    async def register(self, data: SignupRequest) -> User:
        """
        Create a pending account and tell the admins about it.

        Raises:
            MissingFieldsException: A required field is empty
            DuplicateAccountException: Username or email is taken
            StoreWriteError: The insert failed for another reason
        """
        if not all([data.username, data.email, data.password, data.full_name]):
            raise MissingFieldsException()

        role = data.role or UserRole.STAFF
        user = User(
            username=data.username,
            email=data.email,
            password=hash_password(data.password),
            full_name=data.full_name,
            role=role,
            status=AccountStatus.PENDING,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateAccountException()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Signup error: {str(e)}")
            raise StoreWriteError("Signup failed")
        self.db.refresh(user)
        logger.info(f"New pending registration: {user.username} (ID: {user.id}) as {role.value}")

        subject, html = registration_request_email(user.full_name, user.username, user.email, role.value)
        await (
            PostCommitHooks()
            .add("audit", create_audit_log, self.db, AuditAction.SIGNUP, user_id=user.id, table_name="users",
                 record_id=user.id, details={"username": user.username, "email": user.email, "role": role.value},
                 request=self.request)
            .add("email", self.mailer, settings.admin_email, subject, html)
            .add("notify admins", self.dispatcher.broadcast_admin, events.new_pending_user(user))
            .run()
        )
        return user

    async def approve(self, user_id: int, actor: User) -> Tuple[User, bool]:
        """
        Approve a pending account.

        Approving an account that is already approved leaves the store,
        audit trail and mailbox alone but re-sends both events, so a client
        that missed them catches up.

        Returns:
            The account and whether this call changed it
        """
        user, changed = self._decide(user_id, actor, AccountStatus.APPROVED)
        hooks = PostCommitHooks()
        if changed:
            subject, html = approval_email(user.full_name)
            hooks.add("audit", create_audit_log, self.db, AuditAction.APPROVED_USER, user_id=actor.id,
                      table_name="users", record_id=user.id, details={"approvedUser": user.email},
                      request=self.request)
            hooks.add("email", self.mailer, user.email, subject, html)
        await self._notify(hooks, user, events.approved()).run()
        return user, changed

    async def reject(self, user_id: int, actor: User, reason: Optional[str] = None) -> Tuple[User, bool]:
        """
        Reject a pending account.

        Rejecting an already rejected account re-sends the events only.

        Returns:
            The account and whether this call changed it
        """
        reason = reason or DEFAULT_REJECTION_REASON
        user, changed = self._decide(user_id, actor, AccountStatus.REJECTED)
        hooks = PostCommitHooks()
        if changed:
            subject, html = rejection_email(user.full_name, reason)
            hooks.add("audit", create_audit_log, self.db, AuditAction.REJECTED_USER, user_id=actor.id,
                      table_name="users", record_id=user.id, details={"reason": reason}, request=self.request)
            hooks.add("email", self.mailer, user.email, subject, html)
        await self._notify(hooks, user, events.rejected(reason)).run()
        return user, changed

    def _notify(self, hooks: PostCommitHooks, user: User, user_event) -> PostCommitHooks:
        # the user hears first, then every admin
        return (
            hooks
            .add("notify user", self.dispatcher.notify_subject, user.id, user_event)
            .add("notify admins", self.dispatcher.broadcast_admin, events.user_status_changed(user.id, user.status))
        )

    def list_pending(self) -> List[User]:
        return (
            self.db.query(User)
            .filter(User.status == AccountStatus.PENDING)
            .order_by(User.created_at.desc(), User.id.desc())
            .all()
        )

    def list_all(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    def _decide(self, user_id: int, actor: User, target: AccountStatus) -> Tuple[User, bool]:
        if actor is None or not actor.is_admin:
            raise PermissionDeniedException()

        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise ResourceNotFoundException()

        if user.status == target:
            logger.info(f"User {user.username} (ID: {user.id}) is already {target.value}")
            return user, False
        if user.status != AccountStatus.PENDING:
            raise StatusConflictException(user.status, target)

        user.status = target
        user.approved_at = datetime.now(timezone.utc)
        user.approved_by = actor.username
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to mark user {user_id} as {target.value}: {str(e)}")
            raise StoreWriteError("Approval failed" if target == AccountStatus.APPROVED else "Rejection failed")
        self.db.refresh(user)
        logger.info(f"User {user.username} (ID: {user.id}) {target.value} by admin {actor.username}")
        return user, True
