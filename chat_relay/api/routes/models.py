"""
Model Routes - Static catalog of upstream model identifiers.
"""
from fastapi import APIRouter

from chat_relay.llm.catalog import AVAILABLE_MODELS
from chat_relay.models.chat import ModelsResponse

router = APIRouter(
    prefix="/api/models",
    tags=["Models"],
)


@router.api_route(
    "",
    methods=["GET", "HEAD"],
    response_model=ModelsResponse,
    summary="List available models",
)
async def list_models() -> ModelsResponse:
    """Return the fixed model catalog. Independent of configuration."""
    return ModelsResponse(models=list(AVAILABLE_MODELS))
