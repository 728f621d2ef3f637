"""
Gemini client construction and response text extraction.

The client is built once at startup from the configured API key. A missing
key is tolerated: no client is built and every generation attempt fails.
"""

import logging
from typing import Optional

from google import genai

logger = logging.getLogger(__name__)


def build_client(api_key: str) -> Optional[genai.Client]:
    """Return a Gemini client, or None if GEMINI_API_KEY is not set."""
    if not api_key:
        logger.warning("GEMINI_API_KEY is not set — all generation calls will fail")
        return None
    return genai.Client(api_key=api_key)


def extract_text(response) -> str:
    """
    Pull the first candidate's first text part from a generate_content response.

    Returns an empty string for blocked, empty or malformed responses.
    """
    try:
        text = response.candidates[0].content.parts[0].text
    except (AttributeError, IndexError, TypeError):
        return ""
    return (text or "").strip()
