"""
Input Validators - Validation of inbound chat payloads.

Payloads arrive as plain dicts (JSON object or URL-encoded form) and are
checked here before a ChatRequest is built, so that bad input always
produces the relay's own 400 envelope instead of a framework error.
"""
from typing import Any, Mapping, Optional, Tuple

from chat_relay.core.exceptions import ValidationError
from chat_relay.core.logging_config import get_logger
from chat_relay.llm.catalog import DEFAULT_MODEL
from chat_relay.models.chat import ChatRequest

logger = get_logger(__name__)


def validate_message(message: Any) -> Tuple[bool, str, Optional[str]]:
    """
    Validate and trim a user message.

    Args:
        message: Raw value of the 'message' field (may be any JSON type)

    Returns:
        Tuple of (is_valid, trimmed_message, error_message)
    """
    if message is None:
        return False, "", "message is missing"

    if not isinstance(message, str):
        return False, "", f"message must be a string, got {type(message).__name__}"

    trimmed = message.strip()
    if not trimmed:
        return False, "", "message is empty"

    return True, trimmed, None


def validate_model(model: Any) -> Tuple[bool, str, Optional[str]]:
    """
    Resolve the requested model identifier.

    Absent or null falls back to DEFAULT_MODEL. The identifier is not
    checked against the catalog; the upstream decides what it accepts.

    Returns:
        Tuple of (is_valid, model, error_message)
    """
    if model is None:
        return True, DEFAULT_MODEL, None

    if not isinstance(model, str):
        return False, "", f"model must be a string, got {type(model).__name__}"

    return True, model, None


def validate_chat_payload(payload: Mapping[str, Any]) -> ChatRequest:
    """
    Full validation of a chat payload.

    Args:
        payload: Parsed request body

    Returns:
        ChatRequest with the trimmed message and resolved model

    Raises:
        ValidationError: If the message or model is unusable
    """
    is_valid, message, error = validate_message(payload.get("message"))
    if not is_valid:
        logger.debug(f"Rejected chat payload: {error}")
        raise ValidationError(details=error)

    is_valid, model, error = validate_model(payload.get("model"))
    if not is_valid:
        logger.debug(f"Rejected chat payload: {error}")
        raise ValidationError(details=error)

    return ChatRequest(message=message, model=model)
