"""
Gemini model configuration.

Priority chain: small instruction-tuned models first, lite flash models last.
On quota, permission or server errors the fallback caller tries each model
in order.

Put a different model at the front of the chain via GEMINI_MODEL (e.g. in .env):
  GEMINI_MODEL=gemini-2.5-flash
"""

from typing import Optional

DEFAULT_MODEL_CHAIN = (
    "gemma-3-4b-it",
    "gemma-3-1b-it",
    "gemini-2.5-flash-lite",
    "gemini-2.0-flash-lite",
)

# Caller defaults when an endpoint does not pass its own
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_OUTPUT_TOKENS = 300

# 429 RESOURCE_EXHAUSTED / 403 PERMISSION_DENIED
QUOTA_STATUS_CODES = frozenset({429, 403})


def model_chain(primary: Optional[str] = None) -> tuple[str, ...]:
    """Build the ordered model chain, with an optional primary model first."""
    models = [primary] if primary else []
    return tuple(dict.fromkeys(models + list(DEFAULT_MODEL_CHAIN)))
