"""Directives: side effects requested by the state machine.

The state machine never performs I/O. It returns one of these values and
the conversation driver carries it out.
"""

from dataclasses import dataclass
from typing import Union

from .messages import KeyboardHint
from .session import ExtractedData


@dataclass(frozen=True)
class SendFixedText:
    """Send static text as is."""

    text: str
    keyboard: KeyboardHint = KeyboardHint.NONE


@dataclass(frozen=True)
class SendGeneratedText:
    """Ask the language model to phrase the reply for a catalog intent."""

    prompt_key: str
    keyboard: KeyboardHint = KeyboardHint.NONE


@dataclass(frozen=True)
class RequestExtraction:
    """Run document extraction; the outcome is fed back as an event."""

    notice: str | None = None


@dataclass(frozen=True)
class RequestFinalization:
    """Fill the policy template with ``data`` and have it phrased for sending."""

    data: ExtractedData


@dataclass(frozen=True)
class Noop:
    """Nothing to do."""


Directive = Union[SendFixedText, SendGeneratedText, RequestExtraction, RequestFinalization, Noop]
