"""
Chat Service - Business logic for a single chat exchange.

The flow for every request is:
1. Check the upstream credential is configured
2. Call the upstream once
3. Map the result to a ChatResponse or a RelayException

The service holds no per-request state; one instance is shared by all
requests.
"""
from chat_relay.core.config import Settings
from chat_relay.core.exceptions import (
    ConfigurationError,
    RelayException,
    UpstreamAuthenticationError,
    UpstreamBadRequestError,
    UpstreamError,
    UpstreamRateLimitError,
)
from chat_relay.core.logging_config import get_logger
from chat_relay.llm.client import CompletionSuccess, PerplexityClient, UpstreamFailure
from chat_relay.models.chat import ChatRequest, ChatResponse

logger = get_logger(__name__)

# Upstream statuses that get their own client-facing error
_STATUS_ERRORS = {
    401: UpstreamAuthenticationError,
    429: UpstreamRateLimitError,
    400: UpstreamBadRequestError,
}


def map_failure(failure: UpstreamFailure) -> RelayException:
    """
    Translate an upstream failure into the exception the client sees.

    Statuses 401, 429 and 400 map to fixed messages; everything else,
    including replies without content, becomes a generic UpstreamError
    carrying the raw text.
    """
    error_cls = _STATUS_ERRORS.get(failure.status_code)
    if error_cls is not None:
        return error_cls(details=failure.message)
    return UpstreamError(details=failure.message)


class ChatService:
    """
    Service relaying chat messages to Perplexity.

    Example:
        >>> service = ChatService(settings, PerplexityClient.from_settings(settings))
        >>> response = await service.process_message(ChatRequest(message="hi"))
        >>> response.reply
        'Hello!'
    """

    def __init__(self, settings: Settings, client: PerplexityClient):
        self.settings = settings
        self.client = client

    async def process_message(self, request: ChatRequest) -> ChatResponse:
        """
        Relay one message and return the model's reply.

        Args:
            request: Validated chat request

        Returns:
            ChatResponse with the reply and upstream usage

        Raises:
            ConfigurationError: If no API key is configured
            RelayException: Subclass matching the upstream failure
        """
        if not self.settings.api_key_configured:
            logger.error("Chat API Error: PERPLEXITY_API_KEY is not set")
            raise ConfigurationError()

        logger.info(
            f"Processing message: model={request.model}, "
            f"message_length={len(request.message)}"
        )

        try:
            result = await self.client.complete(request.message, model=request.model)
            if isinstance(result, CompletionSuccess):
                response = ChatResponse(
                    reply=result.reply,
                    model=request.model,
                    usage=result.usage,
                )
                logger.info(
                    f"Message processed: model={request.model}, "
                    f"reply_length={len(response.reply)}"
                )
                return response
        except Exception as e:
            # Anything unclassified is reported through the chat envelope
            result = UpstreamFailure(status_code=None, message=str(e), error=e)

        logger.error(
            f"Chat API Error: status={result.status_code} message={result.message}",
            exc_info=result.error,
        )
        raise map_failure(result)
