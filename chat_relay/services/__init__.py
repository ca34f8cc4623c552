"""
Services module - Business logic, no HTTP concerns.
"""
from chat_relay.services.chat_service import ChatService, map_failure

__all__ = [
    "ChatService",
    "map_failure",
]
