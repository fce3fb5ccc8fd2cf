"""InsureBot: conversational car insurance intake."""

from .app import Application, IApplication
from .conversation import (
    ConversationDriver,
    IConversationDriver,
    ISessionStore,
    SessionStore,
    Transition,
    advance,
    fill_template,
)
from .errors import ExtractionError, InsureBotError, TransportError, UpstreamError
from .extraction import (
    IExtractionProvider,
    StaticExtractionProvider,
    VisionExtractionProvider,
)
from .llm import ILLMProvider, LLMProvider
from .models import (
    Attachment,
    ConversationState,
    Event,
    EventKind,
    ExtractedData,
    KeyboardHint,
    Message,
    OutboundMessage,
    Session,
    TraceEvent,
)
from .prompts import PromptCatalog, PromptKey
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker
from .transport import InMemoryTransport, ITransport

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "Attachment",
    "ConversationState",
    "Event",
    "EventKind",
    "ExtractedData",
    "KeyboardHint",
    "Message",
    "OutboundMessage",
    "Session",
    "TraceEvent",
    # Errors
    "InsureBotError",
    "UpstreamError",
    "ExtractionError",
    "TransportError",
    # Conversation
    "ConversationDriver",
    "IConversationDriver",
    "ISessionStore",
    "SessionStore",
    "Transition",
    "advance",
    "fill_template",
    # Components
    "IExtractionProvider",
    "StaticExtractionProvider",
    "VisionExtractionProvider",
    "ILLMProvider",
    "LLMProvider",
    "PromptCatalog",
    "PromptKey",
    "IStorage",
    "Storage",
    "ITracker",
    "Tracker",
    "ITransport",
    "InMemoryTransport",
]
