"""Prompt catalog: intent keys mapped to language-model instructions."""

import json
from enum import Enum
from pathlib import Path

from ..config import DEFAULT_PROMPTS_PATH, DEFAULT_TEMPLATE_PATH


class PromptKey(str, Enum):
    """Intents the state machine can ask the language model to phrase."""

    # System-level
    PERSONA = "persona"
    FINALIZATION = "finalization"

    # Per-intent
    IDENTITY_DOC_REQUESTED = "identity_doc_requested"
    VEHICLE_DOC_REQUESTED = "vehicle_doc_requested"
    DATA_CONFIRMED = "data_confirmed"
    DATA_REJECTED = "data_rejected"
    REASK_CONFIRMATION = "reask_confirmation"
    PRICE_REJECTED = "price_rejected"
    REASK_PRICE = "reask_price"


SYSTEM_KEYS = (PromptKey.PERSONA, PromptKey.FINALIZATION)
USER_KEYS = tuple(key for key in PromptKey if key not in SYSTEM_KEYS)


class PromptCatalog:
    """Static lookup of instruction templates."""

    def __init__(
        self,
        system_prompts: dict[str, str],
        user_prompts: dict[str, str],
        finalization_template: str,
    ):
        missing = [k.value for k in SYSTEM_KEYS if k.value not in system_prompts]
        missing += [k.value for k in USER_KEYS if k.value not in user_prompts]
        if missing:
            raise ValueError(f"Prompt catalog is missing keys: {', '.join(missing)}")

        self._system = dict(system_prompts)
        self._user = dict(user_prompts)
        self._finalization_template = finalization_template

    @classmethod
    def from_files(
        cls,
        prompts_path: str | Path = DEFAULT_PROMPTS_PATH,
        template_path: str | Path = DEFAULT_TEMPLATE_PATH,
    ) -> "PromptCatalog":
        """Load prompts.json and the policy template."""
        with open(prompts_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        with open(template_path, "r", encoding="utf-8") as f:
            template = f.read()

        return cls(
            system_prompts=raw.get("system", {}),
            user_prompts=raw.get("user", {}),
            finalization_template=template,
        )

    def system(self, key: str) -> str:
        return self._system[PromptKey(key).value]

    def user(self, key: str) -> str:
        return self._user[PromptKey(key).value]

    @property
    def persona(self) -> str:
        return self.system(PromptKey.PERSONA)

    @property
    def finalization_instruction(self) -> str:
        return self.system(PromptKey.FINALIZATION)

    @property
    def finalization_template(self) -> str:
        return self._finalization_template
