"""
Health Check Routes - Liveness probe for load balancers and monitors.

The probe does not check upstream connectivity or the API key; it only
confirms the process is serving requests.
"""
from fastapi import APIRouter

from chat_relay.core.logging_config import get_logger
from chat_relay.models.chat import HealthResponse

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])

HEALTH_MESSAGE = "Perplexity API Chatbot Backend is running!"


@router.api_route(
    "/",
    methods=["GET", "HEAD"],
    response_model=HealthResponse,
    summary="Health check endpoint",
)
async def health_check() -> HealthResponse:
    """Report that the API is running and responsive."""
    logger.debug("Health check requested")
    return HealthResponse(message=HEALTH_MESSAGE, status="healthy")
