"""Process-local transport backing the HTTP API."""

import asyncio
from collections import defaultdict
from typing import AsyncIterator

from ..errors import TransportError
from ..models import Event, KeyboardHint, OutboundMessage


class InMemoryTransport:
    """Inbound queue plus per-session outbox."""

    def __init__(self, maxsize: int = 0):
        self._inbox: asyncio.Queue[Event | None] = asyncio.Queue(maxsize=maxsize)
        self._outbox: dict[str, list[OutboundMessage]] = defaultdict(list)
        self._closed = False

    async def deliver(self, event: Event) -> None:
        """Queue an inbound event for the receive loop."""
        if self._closed:
            raise TransportError("Transport closed")
        await self._inbox.put(event)

    async def receive(self) -> AsyncIterator[Event]:
        """Yield queued events until the transport is closed."""
        while True:
            event = await self._inbox.get()
            if event is None:
                return
            yield event

    async def send(
        self,
        session_id: str,
        text: str,
        keyboard: KeyboardHint = KeyboardHint.NONE,
    ) -> None:
        """Append a reply to the session's outbox."""
        if self._closed:
            raise TransportError("Transport closed")
        self._outbox[session_id].append(
            OutboundMessage(session_id=session_id, text=text, keyboard=keyboard)
        )

    def drain(self, session_id: str) -> list[OutboundMessage]:
        """Remove and return the session's pending replies."""
        return self._outbox.pop(session_id, [])

    def discard(self, session_id: str, messages: list[OutboundMessage]) -> None:
        """Remove ``messages`` from the session's outbox, leaving the rest queued."""
        outbox = self._outbox.get(session_id)
        if not outbox:
            return
        for message in messages:
            if message in outbox:
                outbox.remove(message)
        if not outbox:
            del self._outbox[session_id]

    def clear(self) -> None:
        """Drop every pending reply."""
        self._outbox.clear()

    async def close(self) -> None:
        """Stop the receive loop and refuse further traffic."""
        if self._closed:
            return
        self._closed = True
        await self._inbox.put(None)
