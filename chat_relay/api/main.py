"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Application initialization
2. Router registration
3. Middleware configuration (CORS, audit logging)
4. Exception handlers (relay errors, 404, catch-all)
5. Startup/shutdown of the upstream client

Run with: uvicorn chat_relay.api.main:app
"""
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from chat_relay.api.routes import chat_router, health_router, models_router
from chat_relay.core.audit import AuditMiddleware
from chat_relay.core.body_policy import BodyPolicyMiddleware
from chat_relay.core.config import get_settings
from chat_relay.core.exceptions import RelayException
from chat_relay.core.logging_config import get_logger, setup_logging
from chat_relay.llm.client import PerplexityClient
from chat_relay.models.chat import ErrorResponse
from chat_relay.services.chat_service import ChatService


# Initialize logging before anything else
settings = get_settings()
setup_logging(settings.log_level, settings.log_dir, settings.app_name)
logger = get_logger(__name__)

ALLOWED_METHODS = ["GET", "POST"]
ALLOWED_METHODS_HEADER = ",".join(ALLOWED_METHODS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: build the upstream client and chat service once
    - Shutdown: close the upstream connection pool
    """
    app_settings = app.state.settings
    client = PerplexityClient.from_settings(app_settings)
    app.state.chat_service = ChatService(app_settings, client)

    logger.info(f"{app_settings.app_name} running on port {app_settings.port}")
    logger.info(f"Environment: {app_settings.environment}")
    logger.info(f"API Key configured: {'Yes' if app_settings.api_key_configured else 'No'}")

    yield

    logger.info(f"Shutting down {app_settings.app_name}")
    await client.close()


app = FastAPI(
    title="Perplexity Chat Relay",
    description="Relays chat messages from the frontend to the Perplexity API.",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)
app.state.settings = settings


# ============================================================
# Middleware Configuration (last added runs first)
# ============================================================

app.add_middleware(BodyPolicyMiddleware)

if settings.enable_audit_logging:
    app.add_middleware(AuditMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=ALLOWED_METHODS,
    allow_headers=["Content-Type", "Authorization"],
)


# ============================================================
# Exception Handlers
# ============================================================

def _envelope(error: str) -> dict:
    return ErrorResponse(error=error).model_dump(exclude_none=True)


@app.exception_handler(RelayException)
async def relay_exception_handler(request: Request, exc: RelayException):
    """Render relay errors into the standard envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(include_details=request.app.state.settings.is_development())
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Unknown paths and unsupported methods are both reported as 404.

    A plain OPTIONS request (not a CORS preflight) on any path is
    answered with 204 and the allowed methods.
    """
    if exc.status_code in (404, 405):
        if request.method == "OPTIONS":
            return Response(
                status_code=204,
                headers={"Access-Control-Allow-Methods": ALLOWED_METHODS_HEADER}
            )
        return JSONResponse(
            status_code=404,
            content=_envelope("Endpoint not found")
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions globally.

    The error is logged with its traceback; the client only ever sees
    the generic envelope.
    """
    logger.exception(f"Unhandled Error: {exc}")
    return JSONResponse(
        status_code=500,
        content=_envelope("Something went wrong!")
    )


# ============================================================
# Routers
# ============================================================

app.include_router(health_router)
app.include_router(chat_router)
app.include_router(models_router)


def run() -> None:
    """Console entry point: serve the app on 0.0.0.0:$PORT."""
    uvicorn.run(
        "chat_relay.api.main:app",
        host="0.0.0.0",
        port=settings.port,
    )


if __name__ == "__main__":
    run()
