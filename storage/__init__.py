"""
Storage modules for Cape Cod Tides.

This package contains the session handlers that carry the conversation
state between turns.
"""

from .local_handlers import LocalJsonSessionHandler
from .session_handler import AlexaSessionHandler, SessionHandler

__all__ = [
    "SessionHandler",
    "AlexaSessionHandler",
    "LocalJsonSessionHandler",
]
