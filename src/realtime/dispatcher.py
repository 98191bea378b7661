"""
Best-effort delivery of notification events to registered connections.
"""
import logging
from typing import Iterable

from .channel import EventChannel
from .events import NotificationEvent
from .registry import ConnectionRegistry

logger = logging.getLogger(__name__)


class EventDispatcher:
    """
    Sends events to the admin group or to one subject.

    Delivery walks a registry snapshot and offers the event to each channel
    on its own; a closed or overflowing channel is closed and skipped, so one
    dead connection never stops its siblings from receiving the event.
    Events for subjects with no live connection are dropped, not queued.
    """

    def __init__(self, registry: ConnectionRegistry):
        self.registry = registry

    def send_to(self, connection: EventChannel, event: NotificationEvent) -> bool:
        """Attempt one delivery. Returns False when the connection is gone."""
        if connection.try_send(event.encode()):
            return True
        logger.warning(f"Dropping '{event.name}' for a closed event stream")
        # closing ends the stream, whose cleanup unregisters it
        connection.close()
        return False

    def broadcast_admin(self, event: NotificationEvent) -> int:
        """Deliver to every connected admin. Returns the number of deliveries."""
        return self._deliver(self.registry.snapshot_admin(), event)

    def notify_subject(self, subject_id, event: NotificationEvent) -> int:
        """Deliver to every connection of one subject. Returns the number of deliveries."""
        return self._deliver(self.registry.snapshot_user(subject_id), event)

    def _deliver(self, connections: Iterable[EventChannel], event: NotificationEvent) -> int:
        delivered = 0
        for connection in connections:
            if self.send_to(connection, event):
                delivered += 1
        logger.debug(f"Event '{event.name}' delivered to {delivered} connection(s)")
        return delivered
