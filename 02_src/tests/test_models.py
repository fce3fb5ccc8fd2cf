"""Tests for data models."""

import dataclasses
from datetime import datetime, timezone

import pytest

from insurebot.models import (
    Attachment,
    ConversationState,
    Event,
    EventKind,
    ExtractedData,
    KeyboardHint,
    Message,
    OutboundMessage,
    SendFixedText,
    Session,
    TraceEvent,
)


class TestSession:
    """Tests for Session model."""

    def test_defaults(self):
        """Test that a new session starts empty in Initial."""
        session = Session(session_id="chat1")

        assert session.state is ConversationState.INITIAL
        assert session.extracted_data is None
        assert session.documents == ()

    def test_is_immutable(self):
        """Test that sessions are replaced, not mutated."""
        session = Session(session_id="chat1")

        with pytest.raises(dataclasses.FrozenInstanceError):
            session.state = ConversationState.FINISHED

    def test_replace_keeps_other_fields(self):
        """Test updating one field with dataclasses.replace."""
        data = ExtractedData(name="A", passport_number="B", vehicle_number="C")
        session = Session(session_id="chat1", extracted_data=data)

        updated = dataclasses.replace(session, state=ConversationState.FINISHED)

        assert updated.extracted_data == data
        assert session.state is ConversationState.INITIAL


class TestConversationState:
    """Tests for ConversationState enum."""

    def test_values_are_strings(self):
        """Test that states serialize as plain strings."""
        assert ConversationState.AWAITING_PRICE_CONFIRMATION.value == "awaiting_price_confirmation"
        assert ConversationState("finished") is ConversationState.FINISHED

    def test_six_states(self):
        """Test the full set of states."""
        assert len(ConversationState) == 6


class TestEvent:
    """Tests for Event constructors."""

    def test_text_message(self):
        """Test creating a text event."""
        event = Event.text_message("chat1", "hello")

        assert event.kind is EventKind.TEXT
        assert event.text == "hello"
        assert event.attachment is None

    def test_document(self):
        """Test creating a document event."""
        attachment = Attachment(id="photo1", data=b"img")
        event = Event.document("chat1", attachment)

        assert event.kind is EventKind.DOCUMENT
        assert event.attachment == attachment

    def test_other(self):
        """Test creating an event of another kind."""
        event = Event.other("chat1")

        assert event.kind is EventKind.OTHER
        assert event.text is None


class TestAttachment:
    """Tests for Attachment model."""

    def test_defaults(self):
        """Test that attachments default to JPEG."""
        attachment = Attachment(id="photo1")

        assert attachment.media_type == "image/jpeg"
        assert attachment.data is None

    def test_repr_hides_data(self):
        """Test that raw bytes are kept out of logs."""
        attachment = Attachment(id="photo1", data=b"secret-bytes")

        assert "secret-bytes" not in repr(attachment)


class TestOutbound:
    """Tests for outbound models."""

    def test_outbound_default_keyboard(self):
        """Test that replies carry no keyboard by default."""
        message = OutboundMessage(session_id="chat1", text="Hi")

        assert message.keyboard is KeyboardHint.NONE

    def test_fixed_text_directive(self):
        """Test SendFixedText with a keyboard hint."""
        directive = SendFixedText("Correct?", KeyboardHint.YES_NO)

        assert directive.keyboard is KeyboardHint.YES_NO


class TestMessage:
    """Tests for Message model."""

    def test_create_message(self):
        """Test creating a transcript message."""
        ts = datetime.now(timezone.utc)
        msg = Message(
            id="msg1", session_id="chat1", role="user", content="Hello", timestamp=ts
        )

        assert msg.role == "user"
        assert msg.timestamp == ts


class TestTraceEvent:
    """Tests for TraceEvent model."""

    def test_create_trace_event(self):
        """Test creating a TraceEvent."""
        ts = datetime.now(timezone.utc)
        event = TraceEvent(
            id="trace1",
            event_type="state_changed",
            actor="conversation_driver",
            data={"session_id": "chat1"},
            timestamp=ts,
        )

        assert event.event_type == "state_changed"
        assert event.data["session_id"] == "chat1"
