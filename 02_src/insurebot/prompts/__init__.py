"""Prompt catalog module."""

from .catalog import PromptCatalog, PromptKey

__all__ = ["PromptCatalog", "PromptKey"]
