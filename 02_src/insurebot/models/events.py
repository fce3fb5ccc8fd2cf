"""Inbound event data models."""

from dataclasses import dataclass
from enum import Enum

from .messages import Attachment
from .session import ExtractedData


class EventKind(str, Enum):
    """What arrived for a session.

    TEXT, DOCUMENT and OTHER come from the transport. The two extraction
    kinds are produced by the driver after running the extraction
    collaborator and fed back into the state machine.
    """

    TEXT = "text"
    DOCUMENT = "document"
    OTHER = "other"
    EXTRACTION_SUCCEEDED = "extraction_succeeded"
    EXTRACTION_FAILED = "extraction_failed"


@dataclass(frozen=True)
class Event:
    """Something that happened in a session's conversation."""

    session_id: str
    kind: EventKind
    text: str | None = None
    attachment: Attachment | None = None
    extracted: ExtractedData | None = None

    @classmethod
    def text_message(cls, session_id: str, text: str) -> "Event":
        return cls(session_id=session_id, kind=EventKind.TEXT, text=text)

    @classmethod
    def document(cls, session_id: str, attachment: Attachment) -> "Event":
        return cls(session_id=session_id, kind=EventKind.DOCUMENT, attachment=attachment)

    @classmethod
    def other(cls, session_id: str) -> "Event":
        return cls(session_id=session_id, kind=EventKind.OTHER)
