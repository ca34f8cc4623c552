"""
Configuration management via environment variables.

This module loads configuration from a .env file using python-dotenv.
All configuration values are accessed through the Settings class.

Variable names follow the frontend deployment conventions (PORT,
FRONTEND_URL, NODE_ENV) so the relay can be dropped in behind the
existing frontend without touching its environment.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv


# Load .env from the working directory before accessing os.environ
load_dotenv()


DEFAULT_FRONTEND_ORIGINS = ("http://localhost:3000", "http://localhost:3001")
PERPLEXITY_BASE_URL = "https://api.perplexity.ai"

# Body limits: JSON up to 10 MB, URL-encoded forms up to 100 KB
MAX_JSON_BODY_BYTES = 10 * 1024 * 1024
MAX_FORM_BODY_BYTES = 100 * 1024


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, so one instance can be
    shared by every request without synchronization.

    Attributes:
        app_name: Application identifier for logging
        node_env: Raw NODE_ENV value (None when unset)
        port: Port the HTTP server listens on
        cors_origins: Origins allowed to call the API with credentials
        perplexity_api_key: Upstream credential, checked per request
        perplexity_base_url: Upstream endpoint
        perplexity_timeout_seconds: Upstream request timeout
        log_level: Console logging verbosity
        log_dir: Directory for daily log files (None disables file logging)
        enable_audit_logging: Toggle for the request audit middleware
    """
    # Application settings
    app_name: str
    node_env: Optional[str]
    port: int
    log_level: str
    log_dir: Optional[str]

    # CORS
    cors_origins: Tuple[str, ...]

    # Upstream settings
    perplexity_api_key: Optional[str]
    perplexity_base_url: str
    perplexity_timeout_seconds: float

    # Body policy
    max_json_body_bytes: int = MAX_JSON_BODY_BYTES
    max_form_body_bytes: int = MAX_FORM_BODY_BYTES

    enable_audit_logging: bool = True

    @property
    def environment(self) -> str:
        """Environment name as reported at startup."""
        return self.node_env or "development"

    @property
    def api_key_configured(self) -> bool:
        return bool(self.perplexity_api_key)

    def is_development(self) -> bool:
        """Check whether raw error text may be echoed to clients."""
        return self.node_env == "development"


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def _parse_origins(raw: Optional[str]) -> Tuple[str, ...]:
    """Split FRONTEND_URL on commas, falling back to the local dev origins."""
    if not raw:
        return DEFAULT_FRONTEND_ORIGINS
    origins = tuple(origin.strip() for origin in raw.split(",") if origin.strip())
    return origins or DEFAULT_FRONTEND_ORIGINS


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once at startup; call get_settings.cache_clear()
    to pick up environment changes (tests do this).

    Returns:
        Settings instance with all configuration values
    """
    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "PerplexityChatRelay"),
        node_env=os.environ.get("NODE_ENV") or None,
        port=int(_get_env("PORT", "5000")),
        log_level=_get_env("LOG_LEVEL", "INFO"),
        log_dir=_get_env("LOG_DIR", "logs") or None,

        # CORS
        cors_origins=_parse_origins(os.environ.get("FRONTEND_URL")),

        # Upstream
        perplexity_api_key=os.environ.get("PERPLEXITY_API_KEY") or None,
        perplexity_base_url=_get_env("PERPLEXITY_BASE_URL", PERPLEXITY_BASE_URL),
        perplexity_timeout_seconds=float(_get_env("PERPLEXITY_TIMEOUT_SECONDS", "600")),

        enable_audit_logging=_get_env("ENABLE_AUDIT_LOGGING", "true").lower() == "true",
    )
