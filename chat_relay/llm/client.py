"""
LLM Client for the Perplexity API.

Perplexity exposes an OpenAI-compatible chat completion endpoint, so the
official openai SDK is used with its base URL pointed at Perplexity.

The client never raises for upstream problems. complete() returns either
a CompletionSuccess or an UpstreamFailure carrying the status code the
upstream reported (None for transport errors and empty replies), and the
caller decides how to present it.
"""
from dataclasses import dataclass
from typing import Any, Optional, Union

from openai import APIError, APIStatusError, AsyncOpenAI
from pydantic import BaseModel

from chat_relay.core.config import Settings
from chat_relay.core.logging_config import get_logger
from chat_relay.llm.prompts import MAX_TOKENS, TEMPERATURE, build_messages

logger = get_logger(__name__)

EMPTY_REPLY_MESSAGE = "No response content received from Perplexity API"


@dataclass(frozen=True)
class CompletionSuccess:
    """A reply with non-empty content."""
    reply: str
    usage: Optional[Any] = None


@dataclass(frozen=True)
class UpstreamFailure:
    """
    A failed exchange.

    Attributes:
        status_code: HTTP status reported by the upstream, if any
        message: Raw error text, for logs and development responses
        error: The original exception, when there was one
    """
    status_code: Optional[int]
    message: str
    error: Optional[BaseException] = None


CompletionResult = Union[CompletionSuccess, UpstreamFailure]


def _usage_passthrough(usage: Any) -> Any:
    """
    Return the upstream usage as sent.

    Only SDK models are converted (to the fields the upstream set); any
    other value, including malformed ones, is passed on untouched.
    """
    if isinstance(usage, BaseModel):
        return usage.model_dump(exclude_unset=True)
    return usage


def _first_reply(response: Any) -> Optional[str]:
    """Content of the first choice, or None if the reply has none."""
    choices = getattr(response, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None) if message is not None else None


class PerplexityClient:
    """
    Async client for Perplexity chat completions.

    One instance is created at startup and shared by all requests.
    Automatic SDK retries are disabled so each chat request maps to
    exactly one upstream call.

    Example:
        >>> client = PerplexityClient.from_settings(get_settings())
        >>> result = await client.complete("hi", model=DEFAULT_MODEL)
        >>> if isinstance(result, CompletionSuccess):
        ...     print(result.reply)
    """

    def __init__(self, client: Any):
        """
        Args:
            client: An AsyncOpenAI instance (or anything exposing
                chat.completions.create as a coroutine)
        """
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "PerplexityClient":
        """Build the SDK client bound to the configured endpoint and key."""
        client = AsyncOpenAI(
            # The SDK refuses a missing key at construction time; the
            # relay checks for the key per request instead.
            api_key=settings.perplexity_api_key or "not-configured",
            base_url=settings.perplexity_base_url,
            timeout=settings.perplexity_timeout_seconds,
            max_retries=0,
        )
        logger.info(f"Perplexity client initialized (base_url={settings.perplexity_base_url})")
        return cls(client)

    async def complete(self, message: str, model: str) -> CompletionResult:
        """
        Send a single non-streaming completion request.

        Args:
            message: Trimmed user message
            model: Model identifier to request

        Returns:
            CompletionSuccess or UpstreamFailure
        """
        try:
            response = await self._client.chat.completions.create(
                model=model,
                messages=build_messages(message),
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                stream=False,
            )
        except APIStatusError as e:
            return UpstreamFailure(status_code=e.status_code, message=e.message, error=e)
        except APIError as e:
            # Connection errors and timeouts carry no status
            return UpstreamFailure(status_code=None, message=e.message, error=e)

        reply = _first_reply(response)
        if not reply:
            return UpstreamFailure(status_code=None, message=EMPTY_REPLY_MESSAGE)

        return CompletionSuccess(
            reply=reply,
            usage=_usage_passthrough(getattr(response, "usage", None)),
        )

    async def close(self) -> None:
        """Release the SDK's HTTP connection pool."""
        close = getattr(self._client, "close", None)
        if close is not None:
            await close()
