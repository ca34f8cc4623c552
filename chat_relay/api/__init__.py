"""
API module - FastAPI application and HTTP handling.
"""
from chat_relay.api.main import app

__all__ = ["app"]
