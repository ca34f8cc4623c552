"""
FastAPI dependencies shared by the routes.

The chat service lives on app.state and the parsed body on request.state;
routes get both through these functions, which tests can replace with
app.dependency_overrides.
"""
from typing import Any, Dict

from fastapi import Request

from chat_relay.services.chat_service import ChatService


def get_chat_service(request: Request) -> ChatService:
    """Chat service created during application startup."""
    return request.app.state.chat_service


def read_payload(request: Request) -> Dict[str, Any]:
    """
    Body parsed by BodyPolicyMiddleware.

    Unsupported content types and empty bodies give an empty dict.
    """
    return getattr(request.state, "payload", {})
