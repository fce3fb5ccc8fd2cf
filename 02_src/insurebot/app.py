"""Application bootstrap and lifecycle management."""

import asyncio
import os
from typing import Protocol

from .config import resolve_db_path, session_ttl_seconds
from .conversation import ConversationDriver, SessionStore
from .extraction import IExtractionProvider, create_extraction_provider
from .llm import ILLMProvider, LLMProvider
from .logging_config import get_logger
from .prompts import PromptCatalog
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker
from .transport import InMemoryTransport

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset data between test runs."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        db_path: str | None = None,
        llm_provider: ILLMProvider | None = None,
        extractor: IExtractionProvider | None = None,
        catalog: PromptCatalog | None = None,
        session_ttl: float | None = None,
        retry_delay: float | None = None,
    ):
        env_db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)
        self._session_ttl = session_ttl_seconds() if session_ttl is None else session_ttl
        self._retry_delay = retry_delay

        # Injected collaborators win over the ones built in start()
        self._llm: ILLMProvider | None = llm_provider
        self._extractor: IExtractionProvider | None = extractor
        self._catalog: PromptCatalog | None = catalog

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._tracker: ITracker | None = None
        self._store: SessionStore | None = None
        self._transport: InMemoryTransport | None = None
        self._driver: ConversationDriver | None = None
        self._receive_task: asyncio.Task | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Tracker (depends on Storage)
        self._tracker = Tracker(self._storage)

        # 3. Collaborators (no internal dependencies)
        if self._llm is None:
            self._llm = LLMProvider()
        if self._extractor is None:
            self._extractor = create_extraction_provider()
        if self._catalog is None:
            self._catalog = PromptCatalog.from_files()
        logger.info("Collaborators initialized")

        # 4. Sessions and transport
        self._store = SessionStore(ttl_seconds=self._session_ttl)
        self._transport = InMemoryTransport()

        # 5. Driver (depends on everything above)
        self._driver = ConversationDriver(
            store=self._store,
            catalog=self._catalog,
            llm_provider=self._llm,
            extractor=self._extractor,
            transport=self._transport,
            storage=self._storage,
            tracker=self._tracker,
            retry_delay=self._retry_delay,
        )
        self._receive_task = asyncio.create_task(self._driver.run())
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._receive_task:
            self._receive_task.cancel()
            try:
                await self._receive_task
            except asyncio.CancelledError:
                pass
            self._receive_task = None
        if self._transport:
            await self._transport.close()
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Reset data between test runs."""
        if self._store:
            self._store.clear()
        if self._transport:
            self._transport.clear()
        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")
        logger.info("Reset complete")

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def sessions(self) -> SessionStore:
        """Get session store instance."""
        if not self._store:
            raise RuntimeError("Application not started")
        return self._store

    @property
    def transport(self) -> InMemoryTransport:
        """Get transport instance."""
        if not self._transport:
            raise RuntimeError("Application not started")
        return self._transport

    @property
    def driver(self) -> ConversationDriver:
        """Get conversation driver instance."""
        if not self._driver:
            raise RuntimeError("Application not started")
        return self._driver
