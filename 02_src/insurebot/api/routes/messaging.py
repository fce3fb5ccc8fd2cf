"""Messaging API routes."""

import base64
import binascii
import uuid
from typing import Literal

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from ...app import Application
from ...errors import TransportError
from ...models import Attachment, Event, EventKind, OutboundMessage


class DocumentPayload(BaseModel):
    """A submitted document, base64 encoded."""

    media_type: str = "image/jpeg"
    data: str | None = None
    url: str | None = None


class EventRequest(BaseModel):
    """Request model for an inbound event."""

    session_id: str
    kind: Literal["text", "document", "other"]
    text: str | None = None
    document: DocumentPayload | None = None


class ReplyResponse(BaseModel):
    """A single reply sent to the user."""

    text: str
    keyboard: str


class EventResponse(BaseModel):
    """Replies produced by one event and the resulting state."""

    replies: list[ReplyResponse]
    state: str


class QueuedResponse(BaseModel):
    """Acknowledgement for a queued event."""

    status: str


class SessionResponse(BaseModel):
    """Current session snapshot."""

    session_id: str
    state: str
    has_extracted_data: bool
    documents: int


def to_event(request: EventRequest) -> Event:
    """Build a domain Event from the request body."""
    kind = EventKind(request.kind)
    if kind is EventKind.TEXT:
        return Event.text_message(request.session_id, request.text or "")
    if kind is EventKind.DOCUMENT:
        document = request.document or DocumentPayload()
        try:
            data = base64.b64decode(document.data, validate=True) if document.data else None
        except (binascii.Error, ValueError):
            raise HTTPException(status_code=400, detail="Document data is not valid base64")
        return Event.document(
            request.session_id,
            Attachment(
                id=str(uuid.uuid4()),
                media_type=document.media_type,
                data=data,
                url=document.url,
            ),
        )
    return Event.other(request.session_id)


def to_replies(messages: list[OutboundMessage]) -> list[dict]:
    return [{"text": m.text, "keyboard": m.keyboard.value} for m in messages]


def create_messaging_router(app: Application) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post("/events", response_model=EventResponse)
    async def post_event(request: EventRequest) -> dict:
        """Handle an event and return the replies it produced."""
        event = to_event(request)
        try:
            replies = await app.driver.handle_event(event)
            # Replies are returned inline; queued ones stay in the outbox
            app.transport.discard(event.session_id, replies)
            session = app.sessions.get(event.session_id)
            return {"replies": to_replies(replies), "state": session.state.value}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post(
        "/inbox",
        response_model=QueuedResponse,
        status_code=status.HTTP_202_ACCEPTED,
    )
    async def post_inbox(request: EventRequest) -> dict:
        """Queue an event for the receive loop."""
        event = to_event(request)
        try:
            await app.transport.deliver(event)
        except TransportError as e:
            raise HTTPException(status_code=503, detail=str(e))
        return {"status": "queued"}

    @router.get("/outbox/{session_id}", response_model=list[ReplyResponse])
    async def get_outbox(session_id: str) -> list[dict]:
        """Drain replies produced by queued events."""
        return to_replies(app.transport.drain(session_id))

    @router.get("/sessions/{session_id}", response_model=SessionResponse)
    async def get_session(session_id: str) -> dict:
        """Get the session's current state."""
        if session_id not in app.sessions:
            raise HTTPException(status_code=404, detail="Session not found")
        session = app.sessions.get(session_id)
        return {
            "session_id": session.session_id,
            "state": session.state.value,
            "has_extracted_data": session.extracted_data is not None,
            "documents": len(session.documents),
        }

    return router
