"""
Prompt and generation parameters for the chat exchange.
"""
from typing import Dict, List

SYSTEM_PROMPT = (
    "You are a helpful AI assistant. "
    "Provide accurate, informative, and concise responses."
)

MAX_TOKENS = 2048
TEMPERATURE = 0.7


def build_messages(user_message: str) -> List[Dict[str, str]]:
    """Build the two-message exchange sent upstream."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_message},
    ]
