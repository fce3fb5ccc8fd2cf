"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A single observability event recorded by the Tracker."""

    id: str
    event_type: str  # e.g. "event_received", "state_changed"
    actor: str  # who created this event
    data: dict  # self-contained payload for display
    timestamp: datetime
