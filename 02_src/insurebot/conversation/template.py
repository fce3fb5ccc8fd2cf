"""Finalization template filling."""

import re

from ..logging_config import get_logger
from ..models import ExtractedData

logger = get_logger(__name__)

NAME_TOKEN = "{{NAME}}"
PASSPORT_NUMBER_TOKEN = "{{PASSPORT_NUMBER}}"
VEHICLE_NUMBER_TOKEN = "{{VEHICLE_NUMBER}}"

PLACEHOLDERS = {
    NAME_TOKEN: "name",
    PASSPORT_NUMBER_TOKEN: "passport_number",
    VEHICLE_NUMBER_TOKEN: "vehicle_number",
}

_TOKEN_PATTERN = re.compile("|".join(re.escape(token) for token in PLACEHOLDERS))


def fill_template(template: str, data: ExtractedData) -> str:
    """Replace every placeholder token with the matching field of ``data``.

    All tokens are substituted in a single pass, so field values are
    inserted verbatim even if they look like tokens themselves. A token
    missing from the template is logged and skipped.
    """
    for token in PLACEHOLDERS:
        if token not in template:
            logger.warning("Placeholder %s not found in finalization template", token)

    return _TOKEN_PATTERN.sub(
        lambda match: getattr(data, PLACEHOLDERS[match.group(0)]), template
    )
