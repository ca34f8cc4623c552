"""
Static model catalog.

The catalog is echoed to clients by GET /api/models so the frontend can
offer a model picker. It is fixed for the lifetime of the process.
"""
from typing import Tuple

DEFAULT_MODEL = "llama-3.1-sonar-small-128k-online"

AVAILABLE_MODELS: Tuple[str, ...] = (
    "llama-3.1-sonar-small-128k-online",
    "llama-3.1-sonar-small-128k-chat",
    "llama-3.1-sonar-large-128k-online",
    "llama-3.1-sonar-large-128k-chat",
    "llama-3.1-8b-instruct",
    "llama-3.1-70b-instruct",
    "mixtral-8x7b-instruct",
)
