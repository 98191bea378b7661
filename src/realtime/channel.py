"""
Per-connection output channel for the /events stream.

The request handler that owns the stream iterates the channel; everything
else only calls ``try_send``, which never raises and never blocks.
"""
import asyncio
import logging
from typing import Any, AsyncIterator, Dict, Optional

logger = logging.getLogger(__name__)

_CLOSED = object()


class EventChannel:
    """
    Bounded queue of encoded SSE messages plus a closed flag.

    The channel is bound to the event loop it was created on. ``try_send`` and
    ``close`` may be called from worker threads (sync route handlers run in
    the threadpool); those calls are handed over with ``call_soon_threadsafe``.
    """

    def __init__(self, max_queue: int = 100, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=max_queue)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def try_send(self, message: Dict[str, Any]) -> bool:
        """
        Offer one message to the connection.

        Returns False when the channel is closed or its buffer overflowed
        (the slow consumer is then closed).
        """
        if self._closed:
            return False
        if self._on_loop_thread():
            return self._offer(message)
        try:
            self._loop.call_soon_threadsafe(self._offer, message)
        except RuntimeError:
            # loop already shut down
            self._closed = True
            return False
        return True

    def close(self) -> None:
        """Mark the channel closed and wake the consumer. Idempotent."""
        if self._closed:
            return
        self._closed = True
        if self._on_loop_thread():
            self._push_sentinel()
            return
        try:
            self._loop.call_soon_threadsafe(self._push_sentinel)
        except RuntimeError:
            pass

    async def __aiter__(self) -> AsyncIterator[Dict[str, Any]]:
        """Yield queued messages until the channel is closed."""
        while True:
            message = await self._queue.get()
            if message is _CLOSED:
                return
            yield message

    def _on_loop_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    def _offer(self, message: Dict[str, Any]) -> bool:
        if self._closed:
            return False
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning("Event channel buffer full, dropping slow consumer")
            self.close()
            return False
        return True

    def _push_sentinel(self) -> None:
        # make room so the consumer always sees the sentinel
        while True:
            try:
                self._queue.put_nowait(_CLOSED)
                return
            except asyncio.QueueFull:
                self._queue.get_nowait()
