"""
Resolve who is opening an /events stream.
"""
import logging
from typing import Any, Callable, Dict, Optional

from ..core.security import verify_token
from .registry import Identity

logger = logging.getLogger(__name__)


class IdentityResolver:
    """
    Derives the stream identity from a bearer token, falling back to the
    explicit ``role`` / ``userId`` query parameters.

    A valid token wins over the query parameters. A bad or expired token is
    logged and ignored; the connection is never refused because of it.
    """

    def __init__(self, verify: Callable[[str], Optional[Dict[str, Any]]] = verify_token):
        self._verify = verify

    def resolve(
        self,
        token: Optional[str] = None,
        role: Optional[str] = None,
        subject_id: Optional[str] = None,
    ) -> Identity:
        if token:
            claims = self._verify(token)
            if claims:
                return Identity.build(claims.get("role"), claims.get("id"))
            logger.warning("Event stream token verification failed, using query identity")
        return Identity.build(role, subject_id)
