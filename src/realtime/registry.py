"""
Registry of live push connections.

Connections are filed under exactly one group: the admin group (an
unordered set shared by every administrator) or the group of one subject
(an ordered list, one entry per open tab). Guests are never retained.

Each group kind has its own lock. Every insert, removal and snapshot takes
that lock, so delivery iterates over a copy that no concurrent
connect/disconnect can tear.
"""
import enum
import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from .channel import EventChannel

logger = logging.getLogger(__name__)


class StreamRole(str, enum.Enum):
    """Audience a push connection belongs to."""
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"


@dataclass(frozen=True)
class Identity:
    """Who is on the other end of a push connection. Fixed for its lifetime."""
    role: StreamRole
    subject_id: Optional[str] = None

    @classmethod
    def build(cls, role: Optional[str], subject_id=None) -> "Identity":
        """
        Normalize a raw role claim and subject into an Identity.

        ``admin`` joins the admin group; any other role with a subject is a
        user; without a subject the connection is a guest.
        """
        subject = str(subject_id) if subject_id not in (None, "") else None
        if role == StreamRole.ADMIN.value:
            return cls(StreamRole.ADMIN, subject)
        if subject is not None:
            return cls(StreamRole.USER, subject)
        return cls(StreamRole.GUEST, None)


class RegistrationHandle:
    """
    Receipt returned by ``ConnectionRegistry.register``.

    Passing it to ``unregister`` removes the connection; only the first call
    has an effect.
    """

    def __init__(self, identity: Identity, connection: EventChannel, group: Optional[StreamRole]):
        self.identity = identity
        self.connection = connection
        self.group = group
        self._active = group is not None

    @property
    def active(self) -> bool:
        return self._active

    def _release(self) -> bool:
        # called with the owning group's lock held
        if not self._active:
            return False
        self._active = False
        return True


class ConnectionRegistry:
    """
    Live push connections, grouped by audience.

    Built at application startup and closed at shutdown.
    """

    def __init__(self):
        self._admins: Set[EventChannel] = set()
        self._users: Dict[str, List[EventChannel]] = {}
        self._admin_lock = threading.Lock()
        self._user_lock = threading.Lock()

    def register(self, identity: Identity, connection: EventChannel) -> RegistrationHandle:
        """
        File ``connection`` under the group ``identity`` belongs to.

        Guests get an inactive handle and are not stored.
        """
        if identity.role == StreamRole.ADMIN:
            with self._admin_lock:
                self._admins.add(connection)
                total = len(self._admins)
            logger.info(f"Admin stream connected ({total} admin connection(s))")
            return RegistrationHandle(identity, connection, StreamRole.ADMIN)

        if identity.subject_id is not None:
            with self._user_lock:
                connections = self._users.setdefault(identity.subject_id, [])
                if connection not in connections:
                    connections.append(connection)
                total = len(connections)
            logger.info(f"User {identity.subject_id} stream connected ({total} connection(s))")
            return RegistrationHandle(identity, connection, StreamRole.USER)

        logger.debug("Guest stream connected, not retained")
        return RegistrationHandle(identity, connection, None)

    def unregister(self, handle: RegistrationHandle) -> None:
        """Remove the connection behind ``handle``. Repeated calls are no-ops."""
        if handle.group == StreamRole.ADMIN:
            with self._admin_lock:
                if not handle._release():
                    return
                self._admins.discard(handle.connection)
                total = len(self._admins)
            logger.info(f"Admin stream disconnected ({total} admin connection(s))")
        elif handle.group == StreamRole.USER:
            subject_id = handle.identity.subject_id
            with self._user_lock:
                if not handle._release():
                    return
                connections = self._users.get(subject_id)
                if connections is None:
                    return
                if handle.connection in connections:
                    connections.remove(handle.connection)
                if not connections:
                    del self._users[subject_id]
                total = len(connections)
            logger.info(f"User {subject_id} stream disconnected ({total} connection(s))")

    def snapshot_admin(self) -> List[EventChannel]:
        """Point-in-time copy of the admin group."""
        with self._admin_lock:
            return list(self._admins)

    def snapshot_user(self, subject_id) -> List[EventChannel]:
        """Point-in-time copy of one subject's connections, oldest first."""
        with self._user_lock:
            return list(self._users.get(str(subject_id), ()))

    def subjects(self) -> List[str]:
        with self._user_lock:
            return list(self._users)

    def stats(self) -> Dict[str, int]:
        with self._admin_lock:
            admins = len(self._admins)
        with self._user_lock:
            users = sum(len(connections) for connections in self._users.values())
            subjects = len(self._users)
        return {"admin": admins, "user": users, "subjects": subjects}

    def close(self) -> None:
        """
        Close every registered channel and empty the registry.

        Streams wake up, finish, and their own ``unregister`` calls become
        no-ops against the emptied groups.
        """
        with self._admin_lock:
            admins = list(self._admins)
            self._admins.clear()
        with self._user_lock:
            users = [c for connections in self._users.values() for c in connections]
            self._users.clear()
        for connection in admins + users:
            connection.close()
        logger.info(f"Connection registry closed ({len(admins) + len(users)} connection(s) dropped)")
