"""
Core module - Configuration and cross-cutting concerns.

- config.py         : Environment-based configuration
- logging_config.py : Centralized logging setup
- exceptions.py     : Error taxonomy rendered into the JSON envelope
"""
from chat_relay.core.config import get_settings, Settings
from chat_relay.core.logging_config import setup_logging, get_logger

__all__ = [
    "get_settings",
    "Settings",
    "setup_logging",
    "get_logger",
]
