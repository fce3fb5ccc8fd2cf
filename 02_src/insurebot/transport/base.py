"""Transport contract."""

from typing import AsyncIterator, Protocol

from ..models import Event, KeyboardHint


class ITransport(Protocol):
    """Delivers inbound events and carries replies back to users."""

    def receive(self) -> AsyncIterator[Event]:
        """Yield inbound events. Raises TransportError on delivery faults."""
        ...

    async def send(
        self,
        session_id: str,
        text: str,
        keyboard: KeyboardHint = KeyboardHint.NONE,
    ) -> None:
        """Send a reply. The keyboard hint may be ignored."""
        ...
