"""Core data models for InsureBot."""

from .directives import (
    Directive,
    Noop,
    RequestExtraction,
    RequestFinalization,
    SendFixedText,
    SendGeneratedText,
)
from .events import Event, EventKind
from .messages import Attachment, KeyboardHint, Message, OutboundMessage
from .session import ConversationState, ExtractedData, Session
from .tracing import TraceEvent

__all__ = [
    # Session
    "ConversationState",
    "ExtractedData",
    "Session",
    # Events
    "Event",
    "EventKind",
    # Messages
    "Attachment",
    "KeyboardHint",
    "Message",
    "OutboundMessage",
    # Directives
    "Directive",
    "SendFixedText",
    "SendGeneratedText",
    "RequestExtraction",
    "RequestFinalization",
    "Noop",
    # Tracing
    "TraceEvent",
]
