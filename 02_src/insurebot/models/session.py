"""Conversation session data models."""

from dataclasses import dataclass
from enum import Enum

from .messages import Attachment


class ConversationState(str, Enum):
    """Steps of the intake flow, in order."""

    INITIAL = "initial"
    AWAITING_IDENTITY_DOCUMENT = "awaiting_identity_document"
    AWAITING_VEHICLE_DOCUMENT = "awaiting_vehicle_document"
    AWAITING_DATA_CONFIRMATION = "awaiting_data_confirmation"
    AWAITING_PRICE_CONFIRMATION = "awaiting_price_confirmation"
    FINISHED = "finished"


@dataclass(frozen=True)
class ExtractedData:
    """Fields read from the customer's documents."""

    name: str
    passport_number: str
    vehicle_number: str


@dataclass(frozen=True)
class Session:
    """Progress of one conversing user through the intake flow."""

    session_id: str
    state: ConversationState = ConversationState.INITIAL
    extracted_data: ExtractedData | None = None
    documents: tuple[Attachment, ...] = ()
    # Set by the session store when the idle timeout ran out mid-flow
    expired: bool = False
