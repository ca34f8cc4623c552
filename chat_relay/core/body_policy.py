"""
Body Policy Middleware - Size limits and parsing for every request body.

Runs before routing, on every path and method:
- application/json (and +json): at most settings.max_json_body_bytes,
  strict parsing (top level must be an object or array; NaN and
  Infinity are rejected)
- application/x-www-form-urlencoded: at most settings.max_form_body_bytes
- anything else: body ignored

The parsed payload is stored on request.state.payload for the routes.
Oversized or unparsable bodies never reach a route; they get the generic
500 envelope.
"""
import json
from typing import Any, Callable, Dict

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from chat_relay.core.config import Settings
from chat_relay.core.exceptions import RequestBodyError
from chat_relay.core.logging_config import get_logger

logger = get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Leading whitespace allowed before a strict JSON document
_JSON_WHITESPACE = " \t\n\r"


def _media_type(request: Request) -> str:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower()


def _check_size(size: int, limit: int) -> None:
    if size > limit:
        raise RequestBodyError(details=f"request entity too large ({size} > {limit} bytes)")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON token {name}")


def parse_json_body(body: bytes) -> Dict[str, Any]:
    """
    Strictly parse a JSON body.

    Returns:
        The object, or an empty dict for an empty body or a top-level array

    Raises:
        RequestBodyError: If the body is not strict JSON
    """
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise RequestBodyError(details=f"JSON body is not valid UTF-8: {e}") from e

    stripped = text.lstrip(_JSON_WHITESPACE)
    if not stripped:
        return {}
    if stripped[0] not in "{[":
        raise RequestBodyError(details="JSON body must be an object or an array")

    try:
        payload = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise RequestBodyError(details=f"malformed JSON body: {e}") from e

    return payload if isinstance(payload, dict) else {}


async def read_body(request: Request, settings: Settings) -> Dict[str, Any]:
    """
    Enforce the size limit for the request's content type and parse it.

    Raises:
        RequestBodyError: If the body is too large or malformed
    """
    media_type = _media_type(request)
    is_json = media_type == JSON_CONTENT_TYPE or media_type.endswith("+json")

    if is_json:
        limit = settings.max_json_body_bytes
    elif media_type == FORM_CONTENT_TYPE:
        limit = settings.max_form_body_bytes
    else:
        return {}

    declared = request.headers.get("content-length")
    if declared and declared.isdigit():
        _check_size(int(declared), limit)

    body = await request.body()
    _check_size(len(body), limit)

    if not body:
        return {}
    if is_json:
        return parse_json_body(body)

    form = await request.form()
    return dict(form)


class BodyPolicyMiddleware(BaseHTTPMiddleware):
    """
    Rejects oversized or malformed bodies before any route runs.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            request.state.payload = await read_body(request, request.app.state.settings)
        except RequestBodyError as e:
            logger.error(f"Unhandled Error: {request.method} {request.url.path}: {e.details}")
            return JSONResponse(status_code=e.status_code, content=e.to_dict())

        return await call_next(request)
