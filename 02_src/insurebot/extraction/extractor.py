"""Document extraction providers."""

import base64
import json
import os
from typing import Any, Protocol, Sequence

import anthropic

from ..config import DEFAULT_MODEL, extraction_mode
from ..errors import ExtractionError
from ..logging_config import get_logger
from ..models import Attachment, ExtractedData

logger = get_logger(__name__)

SUPPORTED_MEDIA_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}

EXTRACTION_SYSTEM_PROMPT = (
    "You read identity and vehicle registration documents. "
    "Answer with a single JSON object and nothing else."
)

EXTRACTION_PROMPT = (
    "The images are the customer's passport and vehicle identification "
    "document. Return JSON with exactly these keys:\n"
    '{"name": "<full name from the passport>", '
    '"passport_number": "<passport number>", '
    '"vehicle_number": "<vehicle identification number>"}\n'
    "Use an empty string for any value you cannot read."
)

REQUIRED_FIELDS = ("name", "passport_number", "vehicle_number")


class IExtractionProvider(Protocol):
    """Turns submitted documents into an ExtractedData record."""

    async def extract(self, documents: Sequence[Attachment]) -> ExtractedData:
        """Raises ExtractionError when the documents cannot be read."""
        ...


def _extract_json(content: str) -> dict[str, Any]:
    """Parse a JSON object, tolerating prose around it."""
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError:
        start = content.find("{")
        end = content.rfind("}")
        if start == -1 or end <= start:
            raise ExtractionError("Extraction reply contains no JSON object")
        try:
            parsed = json.loads(content[start : end + 1])
        except json.JSONDecodeError as e:
            raise ExtractionError(f"Extraction reply is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ExtractionError("Extraction reply is not a JSON object")
    return parsed


def to_extracted_data(payload: dict[str, Any]) -> ExtractedData:
    """Validate the three required fields and build the record."""
    values = {}
    for field_name in REQUIRED_FIELDS:
        value = payload.get(field_name)
        value = str(value).strip() if value is not None else ""
        if not value:
            raise ExtractionError(f"Could not read {field_name.replace('_', ' ')}")
        values[field_name] = value
    return ExtractedData(**values)


def image_block(doc: Attachment) -> dict | None:
    """Messages API image block for a document, or None if it cannot be sent.

    Inline bytes win over a URL.
    """
    if doc.data and doc.media_type in SUPPORTED_MEDIA_TYPES:
        return {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": doc.media_type,
                "data": base64.b64encode(doc.data).decode("utf-8"),
            },
        }
    if doc.url:
        return {"type": "image", "source": {"type": "url", "url": doc.url}}
    return None


class VisionExtractionProvider:
    """Reads document photos with a vision-capable Claude model."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
    ):
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self._api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self._model = model or os.getenv("ANTHROPIC_MODEL", DEFAULT_MODEL)
        self._client = anthropic.AsyncAnthropic(api_key=self._api_key)

    async def extract(self, documents: Sequence[Attachment]) -> ExtractedData:
        content: list[dict] = [
            block for block in (image_block(doc) for doc in documents) if block
        ]
        if not content:
            raise ExtractionError("No readable document images were submitted")

        content.append({"type": "text", "text": EXTRACTION_PROMPT})

        try:
            response = await self._client.messages.create(
                model=self._model,
                system=EXTRACTION_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": content}],
                max_tokens=512,
            )
        except Exception as e:
            raise ExtractionError(f"Extraction API error: {e}") from e

        text = "".join(
            block.text
            for block in getattr(response, "content", None) or []
            if isinstance(getattr(block, "text", None), str)
        )
        logger.debug("Extraction reply: %s", text[:200])
        return to_extracted_data(_extract_json(text))


class StaticExtractionProvider:
    """Returns a fixed record for any non-empty submission.

    Stands in for a real OCR service in demos and local runs.
    """

    def __init__(self, data: ExtractedData | None = None):
        self._data = data or ExtractedData(
            name="John Smith",
            passport_number="AA1234567",
            vehicle_number="1HGCM82633A004352",
        )

    async def extract(self, documents: Sequence[Attachment]) -> ExtractedData:
        if not documents:
            raise ExtractionError("No documents were submitted")
        return self._data


def create_extraction_provider(mode: str | None = None) -> IExtractionProvider:
    """Build the provider selected by EXTRACTION_MODE."""
    mode = (mode or extraction_mode()).lower()
    if mode == "static":
        return StaticExtractionProvider()
    if mode == "vision":
        return VisionExtractionProvider()
    raise ValueError(f"Unknown EXTRACTION_MODE: {mode!r}")
