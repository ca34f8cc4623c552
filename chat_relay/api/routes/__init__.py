"""
API Routes module - Endpoint definitions.

- health.py : GET /            health probe
- chat.py   : POST /api/chat   relay a message upstream
- models.py : GET /api/models  static model catalog
"""
from chat_relay.api.routes.chat import router as chat_router
from chat_relay.api.routes.health import router as health_router
from chat_relay.api.routes.models import router as models_router

__all__ = [
    "chat_router",
    "health_router",
    "models_router",
]
