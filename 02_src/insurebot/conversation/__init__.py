"""Conversation module: state machine, session store and driver."""

from .driver import ConversationDriver, IConversationDriver
from .machine import Transition, advance
from .store import ISessionStore, SessionStore
from .template import fill_template

__all__ = [
    "ConversationDriver",
    "IConversationDriver",
    "ISessionStore",
    "SessionStore",
    "Transition",
    "advance",
    "fill_template",
]
