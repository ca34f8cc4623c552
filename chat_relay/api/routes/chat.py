"""
Chat Routes - Relay a message to the upstream model.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from chat_relay.api.dependencies import get_chat_service, read_payload
from chat_relay.core.validators import validate_chat_payload
from chat_relay.models.chat import ChatResponse
from chat_relay.services.chat_service import ChatService

router = APIRouter(
    prefix="/api/chat",
    tags=["Chat"],
)


@router.post(
    "",
    response_model=ChatResponse,
    summary="Send a message to the assistant",
)
async def send_message(
    payload: Dict[str, Any] = Depends(read_payload),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Validate the message, relay it upstream and return the reply.

    Body: {"message": str, "model": str (optional)} as JSON or
    URL-encoded form.
    """
    request = validate_chat_payload(payload)
    return await chat_service.process_message(request)
