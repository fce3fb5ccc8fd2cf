"""ConversationDriver: runs the state machine against real collaborators."""

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Protocol

from ..config import transport_retry_delay
from ..errors import ExtractionError, TransportError, UpstreamError
from ..extraction import IExtractionProvider
from ..llm import ILLMProvider
from ..logging_config import get_logger, session_logger
from ..models import (
    Directive,
    Event,
    EventKind,
    KeyboardHint,
    Message,
    Noop,
    OutboundMessage,
    RequestExtraction,
    RequestFinalization,
    SendFixedText,
    SendGeneratedText,
    Session,
)
from ..prompts import PromptCatalog
from ..storage import IStorage
from ..tracker import ITracker
from ..transport import ITransport
from . import texts
from .machine import advance
from .store import ISessionStore
from .template import fill_template

logger = get_logger(__name__)

ACTOR = "conversation_driver"


class IConversationDriver(Protocol):
    """Bridge between the transport and the state machine."""

    async def handle_event(self, event: Event) -> list[OutboundMessage]:
        """Process one inbound event. Return the replies sent."""
        ...

    async def run(self) -> None:
        """Consume the transport until it closes or the task is cancelled."""
        ...


class ConversationDriver:
    """Feeds events to the state machine and executes its directives."""

    def __init__(
        self,
        store: ISessionStore,
        catalog: PromptCatalog,
        llm_provider: ILLMProvider,
        extractor: IExtractionProvider,
        transport: ITransport,
        storage: IStorage,
        tracker: ITracker,
        retry_delay: float | None = None,
    ):
        self._store = store
        self._catalog = catalog
        self._llm = llm_provider
        self._extractor = extractor
        self._transport = transport
        self._storage = storage
        self._tracker = tracker
        self._retry_delay = (
            transport_retry_delay() if retry_delay is None else retry_delay
        )

    async def handle_event(self, event: Event) -> list[OutboundMessage]:
        """Process one inbound event. Return the replies sent.

        The new session is stored only if every directive ran; on a failure
        the session keeps its previous state and the user may retry.
        """
        log = session_logger(logger, event.session_id)
        sent: list[OutboundMessage] = []

        async with self._store.lock(event.session_id):
            session = self._store.get(event.session_id)
            log.info("Event received: kind=%s state=%s", event.kind.value, session.state.value)

            await self._record_inbound(event, session)

            try:
                updated = await self._apply(session, event, sent)
            except UpstreamError as e:
                log.error("LLM call failed: %s", e, exc_info=True)
                await self._tracker.track(
                    "upstream_failed",
                    ACTOR,
                    {"session_id": event.session_id, "state": session.state.value, "error": str(e)},
                )
                await self._send_apology(event.session_id, sent)
                return sent
            except TransportError as e:
                log.error("Reply delivery failed: %s", e, exc_info=True)
                await self._tracker.track(
                    "transport_failed",
                    ACTOR,
                    {"session_id": event.session_id, "error": str(e)},
                )
                return sent

            self._store.put(event.session_id, updated)

            if updated.state != session.state:
                log.info("State changed: %s -> %s", session.state.value, updated.state.value)
                await self._tracker.track(
                    "state_changed",
                    ACTOR,
                    {
                        "session_id": event.session_id,
                        "from": session.state.value,
                        "to": updated.state.value,
                    },
                )

        return sent

    async def run(self) -> None:
        """Consume the transport until it closes or the task is cancelled.

        Each event is handled in its own task. A TransportError restarts
        receiving after ``retry_delay`` seconds; sessions are untouched.
        """
        tasks: set[asyncio.Task] = set()
        logger.info("Receive loop started")

        try:
            while True:
                try:
                    async for event in self._transport.receive():
                        task = asyncio.create_task(self._handle_in_background(event))
                        tasks.add(task)
                        task.add_done_callback(tasks.discard)
                    break
                except TransportError as e:
                    logger.error(
                        "Receive failed: %s; restarting in %.1fs",
                        e,
                        self._retry_delay,
                        exc_info=True,
                    )
                    await self._tracker.track(
                        "transport_failed", ACTOR, {"error": str(e), "phase": "receive"}
                    )
                    await asyncio.sleep(self._retry_delay)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            logger.info("Receive loop cancelled")
            raise

        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Receive loop finished")

    async def _handle_in_background(self, event: Event) -> None:
        try:
            await self.handle_event(event)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Unhandled error for session %s: %s", event.session_id, e, exc_info=True)

    async def _apply(
        self, session: Session, event: Event, sent: list[OutboundMessage]
    ) -> Session:
        """Advance the machine and execute directives; return the session to store."""
        transition = advance(session, event)

        while isinstance(transition.directive, RequestExtraction):
            await self._track_directive(transition.session, transition.directive)
            if transition.directive.notice:
                await self._send(transition.session.session_id, transition.directive.notice, KeyboardHint.NONE, sent)
            result = await self._extract(transition.session)
            transition = advance(transition.session, result)

        await self._execute(transition.session, transition.directive, sent)
        return transition.session

    async def _extract(self, session: Session) -> Event:
        """Run the extraction collaborator and turn the outcome into an event."""
        try:
            data = await self._extractor.extract(list(session.documents))
        except ExtractionError as e:
            session_logger(logger, session.session_id).warning("Extraction failed: %s", e)
            await self._tracker.track(
                "extraction_failed",
                ACTOR,
                {"session_id": session.session_id, "error": str(e)},
            )
            return Event(session_id=session.session_id, kind=EventKind.EXTRACTION_FAILED)

        return Event(
            session_id=session.session_id,
            kind=EventKind.EXTRACTION_SUCCEEDED,
            extracted=data,
        )

    async def _execute(
        self, session: Session, directive: Directive, sent: list[OutboundMessage]
    ) -> None:
        session_id = session.session_id
        await self._track_directive(session, directive)

        if isinstance(directive, SendFixedText):
            await self._send(session_id, directive.text, directive.keyboard, sent)
        elif isinstance(directive, SendGeneratedText):
            text = await self._llm.generate(
                self._catalog.persona, self._catalog.user(directive.prompt_key)
            )
            await self._send(session_id, text, directive.keyboard, sent)
        elif isinstance(directive, RequestFinalization):
            document = fill_template(self._catalog.finalization_template, directive.data)
            text = await self._llm.generate(self._catalog.finalization_instruction, document)
            await self._send(session_id, text, KeyboardHint.NONE, sent)
        elif isinstance(directive, Noop):
            return
        else:
            raise TypeError(f"Unsupported directive: {directive!r}")

    async def _send(
        self,
        session_id: str,
        text: str,
        keyboard: KeyboardHint,
        sent: list[OutboundMessage],
    ) -> None:
        await self._transport.send(session_id, text, keyboard)
        sent.append(OutboundMessage(session_id=session_id, text=text, keyboard=keyboard))
        await self._storage.save_message(
            Message(
                id=str(uuid.uuid4()),
                session_id=session_id,
                role="assistant",
                content=text,
                timestamp=datetime.now(timezone.utc),
            )
        )

    async def _send_apology(self, session_id: str, sent: list[OutboundMessage]) -> None:
        try:
            await self._send(session_id, texts.APOLOGY, KeyboardHint.NONE, sent)
        except TransportError as e:
            logger.error("Could not deliver apology to %s: %s", session_id, e)

    async def _record_inbound(self, event: Event, session: Session) -> None:
        if event.kind is EventKind.TEXT:
            content = event.text or ""
        else:
            content = f"[{event.kind.value}]"

        await self._storage.save_message(
            Message(
                id=str(uuid.uuid4()),
                session_id=event.session_id,
                role="user",
                content=content,
                timestamp=datetime.now(timezone.utc),
            )
        )
        await self._tracker.track(
            "event_received",
            ACTOR,
            {
                "session_id": event.session_id,
                "kind": event.kind.value,
                "state": session.state.value,
            },
        )

    async def _track_directive(self, session: Session, directive: Directive) -> None:
        await self._tracker.track(
            "directive_executed",
            ACTOR,
            {
                "session_id": session.session_id,
                "directive": type(directive).__name__,
                "state": session.state.value,
            },
        )
