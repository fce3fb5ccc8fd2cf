"""Project-level configuration and path helpers."""

import os
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "insurebot.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"
DEFAULT_PROMPTS_PATH = PROMPTS_DIR / "prompts.json"
DEFAULT_TEMPLATE_PATH = PROMPTS_DIR / "policy_template.txt"

DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_SESSION_TTL_SECONDS = 3600
DEFAULT_TRANSPORT_RETRY_DELAY = 1.0

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def session_ttl_seconds() -> float:
    """Idle time after which a session is discarded."""
    return float(os.getenv("SESSION_TTL_SECONDS", DEFAULT_SESSION_TTL_SECONDS))


def transport_retry_delay() -> float:
    """Seconds to wait before restarting the receive loop."""
    return float(os.getenv("TRANSPORT_RETRY_DELAY", DEFAULT_TRANSPORT_RETRY_DELAY))


def extraction_mode() -> str:
    """Either "vision" or "static"."""
    return os.getenv("EXTRACTION_MODE", "vision").lower()
