"""
LLM module - Upstream model integration.
"""
from chat_relay.llm.client import (
    CompletionResult,
    CompletionSuccess,
    PerplexityClient,
    UpstreamFailure,
)
from chat_relay.llm.catalog import AVAILABLE_MODELS, DEFAULT_MODEL

__all__ = [
    "CompletionResult",
    "CompletionSuccess",
    "PerplexityClient",
    "UpstreamFailure",
    "AVAILABLE_MODELS",
    "DEFAULT_MODEL",
]
