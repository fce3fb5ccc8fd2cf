"""Conversation state machine.

``advance`` is a pure function of a session and an event. It returns the
next session value together with a single directive describing the side
effect to perform; it never talks to the outside world.
"""

from dataclasses import dataclass, replace
from typing import Callable

from ..models import (
    ConversationState,
    Directive,
    Event,
    EventKind,
    KeyboardHint,
    Noop,
    RequestExtraction,
    RequestFinalization,
    SendFixedText,
    SendGeneratedText,
    Session,
)
from ..prompts import PromptKey
from . import texts

YES = "yes"
NO = "no"


@dataclass(frozen=True)
class Transition:
    """Result of feeding one event to the machine."""

    session: Session
    directive: Directive


def is_restart(event: Event) -> bool:
    """True for the restart command, whatever the casing or padding."""
    if event.kind is not EventKind.TEXT or event.text is None:
        return False
    return event.text.strip().lower() == texts.RESTART_COMMAND


def parse_answer(event: Event) -> str | None:
    """Return "yes" or "no" for a yes/no reply, None for anything else."""
    if event.kind is not EventKind.TEXT or event.text is None:
        return None
    answer = event.text.strip().lower()
    return answer if answer in (YES, NO) else None


def summary_text(session: Session) -> str:
    data = session.extracted_data
    return texts.SUMMARY.format(
        name=data.name,
        passport_number=data.passport_number,
        vehicle_number=data.vehicle_number,
    )


def restart(session: Session) -> Session:
    """Back to document collection with nothing cached."""
    return replace(
        session,
        state=ConversationState.AWAITING_IDENTITY_DOCUMENT,
        extracted_data=None,
        documents=(),
        expired=False,
    )


def is_interrupted(session: Session) -> bool:
    """True for a session whose idle timeout ran out in the middle of the flow."""
    return session.expired and session.state not in (
        ConversationState.INITIAL,
        ConversationState.FINISHED,
    )


def _initial(session: Session, event: Event) -> Transition:
    # Only the restart command enters the flow
    return Transition(session, Noop())


def _awaiting_identity_document(session: Session, event: Event) -> Transition:
    if event.kind is EventKind.DOCUMENT:
        documents = (event.attachment,) if event.attachment else ()
        return Transition(
            replace(
                session,
                state=ConversationState.AWAITING_VEHICLE_DOCUMENT,
                documents=documents,
            ),
            SendFixedText(texts.IDENTITY_DOCUMENT_RECEIVED),
        )
    return Transition(session, SendGeneratedText(PromptKey.IDENTITY_DOC_REQUESTED))


def _awaiting_vehicle_document(session: Session, event: Event) -> Transition:
    if event.kind is EventKind.DOCUMENT:
        documents = session.documents
        if event.attachment:
            documents = documents + (event.attachment,)
        return Transition(
            replace(session, documents=documents),
            RequestExtraction(notice=texts.VEHICLE_DOCUMENT_RECEIVED),
        )

    if event.kind is EventKind.EXTRACTION_SUCCEEDED and event.extracted is not None:
        confirmed = replace(
            session,
            state=ConversationState.AWAITING_DATA_CONFIRMATION,
            extracted_data=event.extracted,
        )
        return Transition(
            confirmed,
            SendFixedText(summary_text(confirmed), KeyboardHint.YES_NO),
        )

    if event.kind in (EventKind.EXTRACTION_SUCCEEDED, EventKind.EXTRACTION_FAILED):
        # Keep the identity document, ask for the vehicle one again
        return Transition(
            replace(session, documents=session.documents[:1]),
            SendGeneratedText(PromptKey.VEHICLE_DOC_REQUESTED),
        )

    return Transition(session, SendGeneratedText(PromptKey.VEHICLE_DOC_REQUESTED))


def _awaiting_data_confirmation(session: Session, event: Event) -> Transition:
    answer = parse_answer(event)
    if answer == YES:
        return Transition(
            replace(session, state=ConversationState.AWAITING_PRICE_CONFIRMATION),
            SendGeneratedText(PromptKey.DATA_CONFIRMED, KeyboardHint.YES_NO),
        )
    if answer == NO:
        return Transition(restart(session), SendGeneratedText(PromptKey.DATA_REJECTED))
    return Transition(
        session,
        SendGeneratedText(PromptKey.REASK_CONFIRMATION, KeyboardHint.YES_NO),
    )


def _awaiting_price_confirmation(session: Session, event: Event) -> Transition:
    answer = parse_answer(event)
    if answer == YES:
        if session.extracted_data is None:
            return Transition(restart(session), SendFixedText(texts.SESSION_EXPIRED))
        return Transition(
            replace(session, state=ConversationState.FINISHED),
            RequestFinalization(session.extracted_data),
        )
    if answer == NO:
        return Transition(
            session,
            SendGeneratedText(PromptKey.PRICE_REJECTED, KeyboardHint.YES_NO),
        )
    return Transition(
        session,
        SendGeneratedText(PromptKey.REASK_PRICE, KeyboardHint.YES_NO),
    )


def _finished(session: Session, event: Event) -> Transition:
    return Transition(session, SendFixedText(texts.THANK_YOU))


_HANDLERS: dict[ConversationState, Callable[[Session, Event], Transition]] = {
    ConversationState.INITIAL: _initial,
    ConversationState.AWAITING_IDENTITY_DOCUMENT: _awaiting_identity_document,
    ConversationState.AWAITING_VEHICLE_DOCUMENT: _awaiting_vehicle_document,
    ConversationState.AWAITING_DATA_CONFIRMATION: _awaiting_data_confirmation,
    ConversationState.AWAITING_PRICE_CONFIRMATION: _awaiting_price_confirmation,
    ConversationState.FINISHED: _finished,
}

_unhandled = set(ConversationState) - set(_HANDLERS)
if _unhandled:
    raise RuntimeError(f"No transition handler for states: {sorted(s.value for s in _unhandled)}")


def advance(session: Session, event: Event) -> Transition:
    """Apply ``event`` to ``session``.

    The restart command is checked first and wins in every state. An
    expired session in the middle of the flow then answers any event by
    going back to document collection.
    """
    if is_restart(event):
        return Transition(restart(session), SendFixedText(texts.GREETING))
    if is_interrupted(session):
        return Transition(restart(session), SendFixedText(texts.SESSION_EXPIRED))
    return _HANDLERS[session.state](session, event)
