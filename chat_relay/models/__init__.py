"""
Models module - Pydantic schemas for requests and responses.
"""
from chat_relay.models.chat import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HealthResponse,
    ModelsResponse,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthResponse",
    "ModelsResponse",
]
