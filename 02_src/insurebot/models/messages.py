"""Message-related data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal


class KeyboardHint(str, Enum):
    """Rendering hint passed to the transport alongside outbound text."""

    NONE = "none"
    YES_NO = "yes_no"


@dataclass(frozen=True)
class Attachment:
    """A document submitted by the user (usually a photo)."""

    id: str
    media_type: str = "image/jpeg"
    data: bytes | None = field(default=None, repr=False)
    url: str | None = None


@dataclass(frozen=True)
class OutboundMessage:
    """A reply handed to the transport."""

    session_id: str
    text: str
    keyboard: KeyboardHint = KeyboardHint.NONE


@dataclass
class Message:
    """A single transcript entry for a session."""

    id: str
    session_id: str
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime
