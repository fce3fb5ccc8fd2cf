"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from insurebot.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker with storage."""
    from insurebot.tracker import Tracker

    return Tracker(storage=storage)


@pytest.fixture
def extracted_data():
    """Sample extracted record."""
    from insurebot.models import ExtractedData

    return ExtractedData(
        name="Jane Doe", passport_number="AB123456", vehicle_number="VIN001"
    )


@pytest.fixture
def mock_llm():
    """Create mock LLM provider."""
    llm = Mock()
    llm.generate = AsyncMock(return_value="Test response")
    return llm


@pytest.fixture
def mock_extractor(extracted_data):
    """Create mock extraction provider."""
    extractor = Mock()
    extractor.extract = AsyncMock(return_value=extracted_data)
    return extractor


@pytest.fixture
def catalog():
    """Prompt catalog loaded from the shipped assets."""
    from insurebot.prompts import PromptCatalog

    return PromptCatalog.from_files()


@pytest.fixture
def session_store():
    """Create a session store without expiry."""
    from insurebot.conversation import SessionStore

    return SessionStore()


@pytest.fixture
def transport():
    """Create in-memory transport."""
    from insurebot.transport import InMemoryTransport

    return InMemoryTransport()


@pytest.fixture
def driver(session_store, catalog, mock_llm, mock_extractor, transport, storage, tracker):
    """Create ConversationDriver wired to mocks."""
    from insurebot.conversation import ConversationDriver

    return ConversationDriver(
        store=session_store,
        catalog=catalog,
        llm_provider=mock_llm,
        extractor=mock_extractor,
        transport=transport,
        storage=storage,
        tracker=tracker,
        retry_delay=0.01,
    )


@pytest.fixture
def photo():
    """A submitted document photo."""
    from insurebot.models import Attachment

    return Attachment(id="photo1", media_type="image/jpeg", data=b"\xff\xd8\xff")
