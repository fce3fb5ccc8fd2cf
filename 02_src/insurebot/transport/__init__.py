"""Transport module."""

from .base import ITransport
from .memory import InMemoryTransport

__all__ = ["ITransport", "InMemoryTransport"]
