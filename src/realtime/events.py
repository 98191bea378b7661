"""
Notification events pushed over /events and their payload shapes.
"""
import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict

from fastapi.encoders import jsonable_encoder

CONNECTED = "connected"
NEW_PENDING_USER = "new_pending_user"
USER_STATUS_CHANGED = "user_status_changed"
APPROVED = "approved"
REJECTED = "rejected"


@dataclass(frozen=True)
class NotificationEvent:
    """A named event and its payload. Built, dispatched and discarded."""
    name: str
    payload: Dict[str, Any] = field(default_factory=dict)

    def encode(self) -> Dict[str, str]:
        """Render as an sse-starlette message (``event`` + JSON ``data``)."""
        return {"event": self.name, "data": json.dumps(jsonable_encoder(self.payload))}


def connected(role: str) -> NotificationEvent:
    return NotificationEvent(CONNECTED, {"role": role, "timestamp": int(time.time() * 1000)})


def new_pending_user(user) -> NotificationEvent:
    return NotificationEvent(NEW_PENDING_USER, {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "fullName": user.full_name,
        "role": user.role,
        "status": user.status,
        "created_at": user.created_at,
    })


def user_status_changed(user_id, status) -> NotificationEvent:
    return NotificationEvent(USER_STATUS_CHANGED, {"id": str(user_id), "status": status})


def approved() -> NotificationEvent:
    return NotificationEvent(APPROVED, {"message": "Your account has been approved"})


def rejected(reason: str) -> NotificationEvent:
    return NotificationEvent(REJECTED, {"message": "Your account registration was rejected", "reason": reason})
