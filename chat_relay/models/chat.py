"""
Request and Response models for the relay API.

These Pydantic models define the contract between the frontend and the
relay. Every response carries a 'success' flag; timestamps are ISO-8601
UTC strings with millisecond precision, e.g. 2024-01-15T10:30:45.123Z.
"""
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_serializer

from chat_relay.llm.catalog import DEFAULT_MODEL


def utc_timestamp() -> str:
    """Current UTC time in ISO-8601 with a 'Z' suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ChatRequest(BaseModel):
    """
    A validated chat request.

    Built by chat_relay.core.validators from the raw body, so 'message'
    is already trimmed and non-empty.
    """
    message: str = Field(
        ...,
        min_length=1,
        description="The user's message",
        examples=["What is the capital of France?"]
    )
    model: str = Field(
        default=DEFAULT_MODEL,
        description="Upstream model identifier"
    )


class ChatResponse(BaseModel):
    """Successful reply from POST /api/chat."""
    reply: str = Field(..., description="The model's reply")
    success: bool = True
    model: str = Field(..., description="Model that produced the reply")
    timestamp: str = Field(default_factory=utc_timestamp)
    usage: Optional[Any] = Field(
        default=None,
        description="Usage accounting exactly as reported by the upstream"
    )

    @model_serializer(mode="wrap")
    def _omit_missing_usage(self, handler):
        # Omit usage only when the upstream sent none
        data = handler(self)
        if self.usage is None:
            data.pop("usage", None)
        return data


class ModelsResponse(BaseModel):
    """Response model for GET /api/models."""
    models: List[str]
    success: bool = True
    timestamp: str = Field(default_factory=utc_timestamp)


class HealthResponse(BaseModel):
    """Response model for the health probe."""
    message: str
    status: str = Field(default="healthy")
    timestamp: str = Field(default_factory=utc_timestamp)


class ErrorResponse(BaseModel):
    """Standard error envelope."""
    error: str
    success: bool = False
    message: Optional[str] = Field(
        default=None,
        description="Raw error text, development mode only"
    )
