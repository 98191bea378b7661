"""
Server-Sent Events endpoint for real-time approval notifications.
"""
import logging
from typing import AsyncGenerator, Dict, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sse_starlette.sse import EventSourceResponse

from ..config import settings
from . import events
from .channel import EventChannel
from .dependencies import get_identity_resolver, get_registry
from .identity import IdentityResolver
from .registry import ConnectionRegistry, Identity

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Events"])

bearer_scheme = HTTPBearer(auto_error=False)


async def event_stream(
    identity: Identity,
    registry: ConnectionRegistry,
    queue_size: int = 100,
) -> AsyncGenerator[Dict[str, str], None]:
    """
    Body of one /events connection.

    Emits ``connected`` first, then whatever the dispatcher offers this
    connection until the client goes away or the channel is closed. The
    connection is unregistered exactly once, when this generator exits.
    """
    channel = EventChannel(max_queue=queue_size)
    channel.try_send(events.connected(identity.role.value).encode())
    handle = registry.register(identity, channel)
    try:
        async for message in channel:
            yield message
    finally:
        registry.unregister(handle)
        channel.close()


@router.get("/events", summary="Real-time notification stream")
async def events_route(
    token: Optional[str] = Query(None, description="Bearer token for clients that cannot set headers"),
    role: Optional[str] = Query(None, description="Fallback role when no valid token is given"),
    user_id: Optional[str] = Query(None, alias="userId", description="Fallback subject id"),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    registry: ConnectionRegistry = Depends(get_registry),
    resolver: IdentityResolver = Depends(get_identity_resolver),
):
    """
    Open a long-lived event stream.

    Admins receive ``new_pending_user`` and ``user_status_changed``;
    users receive ``approved`` / ``rejected`` for their own account.
    """
    credential = credentials.credentials if credentials else token
    identity = resolver.resolve(credential, role, user_id)
    logger.info(f"Event stream opened: role={identity.role.value} subject={identity.subject_id}")
    return EventSourceResponse(
        event_stream(identity, registry, settings.sse_queue_size),
        ping=settings.sse_ping_interval,
    )
