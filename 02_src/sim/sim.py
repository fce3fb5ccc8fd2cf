"""SIM implementation - scripted customer scenarios for manual testing."""

import asyncio
import base64
import random
from typing import Protocol

import httpx

from insurebot.logging_config import get_logger
from insurebot.tracker import ITracker

logger = get_logger(__name__)

# Not a real image: meant for EXTRACTION_MODE=static
PLACEHOLDER_PHOTO = base64.b64encode(b"sim-document-photo").decode("ascii")

TEXT = "text"
PHOTO = "photo"

# Each step is (kind, text)
SCENARIOS = {
    "happy_path": [
        (TEXT, "/start"),
        (PHOTO, None),
        (PHOTO, None),
        (TEXT, "yes"),
        (TEXT, "Yes"),
    ],
    "rejects_data": [
        (TEXT, "/start"),
        (TEXT, "hi, what do you need?"),
        (PHOTO, None),
        (PHOTO, None),
        (TEXT, "no"),
        (PHOTO, None),
        (PHOTO, None),
        (TEXT, "  YES "),
        (TEXT, "too expensive"),
        (TEXT, "no"),
        (TEXT, "yes"),
    ],
}


class ISim(Protocol):
    """Drive scripted conversations through the HTTP API."""

    async def start(self) -> None:
        """Start the scenarios."""
        ...

    async def stop(self) -> None:
        """Stop the scenarios."""
        ...


class Sim:
    """SIM with scripted customer scenarios."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        tracker: ITracker | None = None,
    ):
        self._api_url = api_url
        self._tracker = tracker
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    def set_tracker(self, tracker: ITracker) -> None:
        """Inject tracker for SIM trace events."""
        self._tracker = tracker

    async def start(self) -> None:
        """Start scripted scenarios."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient(base_url=self._api_url, timeout=60.0)
        self._task = asyncio.create_task(self._run_scenarios())

    async def stop(self) -> None:
        """Stop scenarios."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    async def _run_scenarios(self) -> None:
        """Run every scenario concurrently, one virtual customer each."""
        if self._tracker:
            await self._tracker.track(
                "sim_started", "sim", {"scenarios": list(SCENARIOS)}
            )

        try:
            await asyncio.gather(
                *[
                    self._run_scenario(f"sim_{name}", steps)
                    for name, steps in SCENARIOS.items()
                ]
            )
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e, exc_info=True)
        finally:
            self._running = False
            if self._tracker:
                await self._tracker.track(
                    "sim_completed", "sim", {"scenarios": list(SCENARIOS)}
                )

    async def _run_scenario(self, session_id: str, steps: list[tuple[str, str | None]]) -> None:
        for kind, text in steps:
            if not self._running:
                return
            await self._send_step(session_id, kind, text)
            await asyncio.sleep(random.uniform(0.5, 1.5))

    async def _send_step(self, session_id: str, kind: str, text: str | None) -> None:
        """Send one step via HTTP API."""
        if not self._client:
            return

        if kind == PHOTO:
            body = {
                "session_id": session_id,
                "kind": "document",
                "document": {"media_type": "image/jpeg", "data": PLACEHOLDER_PHOTO},
            }
        else:
            body = {"session_id": session_id, "kind": "text", "text": text}

        try:
            response = await self._client.post("/api/events", json=body)
        except httpx.HTTPError as e:
            logger.error("SIM: Failed to send event: %s", e)
            return

        if response.status_code != 200:
            logger.error("SIM: Error sending event: %s", response.status_code)
            return

        data = response.json()
        logger.info("SIM: %s -> %s", session_id, text or "[photo]")
        for reply in data.get("replies", []):
            logger.info("SIM: %s <- %s", session_id, reply["text"][:100])
        logger.info("SIM: %s state=%s", session_id, data.get("state"))
