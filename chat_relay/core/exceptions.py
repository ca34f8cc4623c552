"""
Custom Exceptions - Application-specific error classes.

Every exception carries the HTTP status and the client-facing error text.
The API layer renders them into the standard envelope:

    {"error": "...", "success": false}

Raw upstream detail is kept on the exception for logging and is only
echoed to clients when an exception opts in (see UpstreamError).
"""
from typing import Optional


class RelayException(Exception):
    """
    Base exception for all relay errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error: str = "Something went wrong!"
    expose_details: bool = False

    def __init__(self, error: Optional[str] = None, details: Optional[str] = None):
        self.error = error or self.error
        self.details = details
        super().__init__(details or self.error)

    def to_dict(self, include_details: bool = False) -> dict:
        """Convert to error envelope dict."""
        body = {
            "error": self.error,
            "success": False,
        }
        if include_details and self.expose_details and self.details:
            body["message"] = self.details
        return body


class ValidationError(RelayException):
    """Raised when the chat payload is missing or malformed."""
    status_code = 400
    error = "Message is required and must be a non-empty string"


class ConfigurationError(RelayException):
    """Raised when the upstream credential is not configured."""
    status_code = 500
    error = "Perplexity API key not configured"


class UpstreamAuthenticationError(RelayException):
    """Upstream rejected the API key."""
    status_code = 401
    error = "Invalid Perplexity API key"


class UpstreamRateLimitError(RelayException):
    """Upstream throttled the request."""
    status_code = 429
    error = "API rate limit exceeded. Please try again later."


class UpstreamBadRequestError(RelayException):
    """Upstream refused the shape of the request."""
    status_code = 400
    error = "Invalid request to Perplexity API"


class UpstreamError(RelayException):
    """
    Any other upstream failure, including a reply without content.

    The raw error text is echoed as 'message' in development mode.
    """
    status_code = 500
    error = "Internal server error while processing your request"
    expose_details = True


class RequestBodyError(RelayException):
    """Raised when a request body is oversized or cannot be parsed."""
    status_code = 500
