"""Tests for PromptCatalog."""

import json

import pytest

from insurebot.prompts import PromptCatalog, PromptKey
from insurebot.prompts.catalog import SYSTEM_KEYS, USER_KEYS


def full_prompts():
    return (
        {key.value: f"system {key.value}" for key in SYSTEM_KEYS},
        {key.value: f"user {key.value}" for key in USER_KEYS},
    )


class TestPromptCatalog:
    """Tests for PromptCatalog lookups."""

    def test_shipped_catalog_loads(self, catalog):
        """Test that the packaged prompts cover every key."""
        for key in USER_KEYS:
            assert catalog.user(key)
        assert catalog.persona
        assert catalog.finalization_instruction
        assert "{{NAME}}" in catalog.finalization_template

    def test_lookup_by_string_value(self):
        """Test that keys may be passed as plain strings."""
        system, user = full_prompts()
        catalog = PromptCatalog(system, user, "template")

        assert catalog.user("data_confirmed") == "user data_confirmed"
        assert catalog.user(PromptKey.DATA_CONFIRMED) == "user data_confirmed"
        assert catalog.system(PromptKey.PERSONA) == "system persona"

    def test_unknown_key_raises(self):
        """Test that an unknown key is rejected."""
        system, user = full_prompts()
        catalog = PromptCatalog(system, user, "template")

        with pytest.raises(ValueError):
            catalog.user("no_such_intent")

    def test_missing_key_fails_at_construction(self):
        """Test that an incomplete catalog is refused."""
        system, user = full_prompts()
        del user[PromptKey.REASK_PRICE.value]

        with pytest.raises(ValueError, match="reask_price"):
            PromptCatalog(system, user, "template")

    def test_from_files(self, tmp_path):
        """Test loading from custom files."""
        system, user = full_prompts()
        prompts_path = tmp_path / "prompts.json"
        prompts_path.write_text(json.dumps({"system": system, "user": user}))
        template_path = tmp_path / "template.txt"
        template_path.write_text("Dear {{NAME}}")

        catalog = PromptCatalog.from_files(prompts_path, template_path)

        assert catalog.finalization_template == "Dear {{NAME}}"
        assert catalog.user(PromptKey.REASK_PRICE) == "user reask_price"
