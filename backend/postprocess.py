"""
Shaping of raw Gemini text into endpoint responses.

Gemini does not reliably follow length or format instructions, so every
limit the prompts ask for is enforced again here.
"""

import json
import re

from pydantic import ValidationError

from models.summary import KEY_POINT_COUNT, SlideSummary

KEY_POINT_WORD_CAP = 7

_SENTENCE_END = re.compile(r"[.!?]")
_TRAILING_COMMA = re.compile(r",\s*$")
_TRAILING_PUNCTUATION = re.compile(r"[.,;:!?]+$")


class MalformedGenerationError(ValueError):
    """Generated text could not be turned into the expected structure."""


def extract_json_object(raw: str) -> dict:
    """
    Return the first JSON object embedded in raw text.

    Leading and trailing commentary (including markdown fences) is ignored.
    Each '{' is tried in turn until a complete object decodes.
    """
    decoder = json.JSONDecoder()
    start = raw.find("{")
    if start == -1:
        raise MalformedGenerationError("No JSON found in response")

    while start != -1:
        try:
            data, _ = decoder.raw_decode(raw, start)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, dict):
            return data
        start = raw.find("{", start + 1)

    raise MalformedGenerationError("Generated content is not valid JSON")


def parse_summary(raw: str) -> SlideSummary:
    data = extract_json_object(raw)
    try:
        return SlideSummary.model_validate(data)
    except ValidationError as exc:
        raise MalformedGenerationError("Invalid response structure") from exc


def shape_description(text: str) -> str:
    """Keep only the first sentence and end it with a single full stop."""
    first = _TRAILING_COMMA.sub("", _SENTENCE_END.split(text, maxsplit=1)[0]).strip()
    if not first:
        raise MalformedGenerationError("Generated description is empty")
    return first + "."


def shape_key_point(text: str) -> str:
    words = text.split()[:KEY_POINT_WORD_CAP]
    shaped = _TRAILING_PUNCTUATION.sub("", " ".join(words))
    if not shaped:
        raise MalformedGenerationError("Generated key point is empty")
    return shaped


def shape_key_points(points: list[str]) -> list[str]:
    return [shape_key_point(p) for p in points[:KEY_POINT_COUNT]]


def first_line(raw: str, fallback: str) -> str:
    """First line of raw, trimmed; fallback when that line is empty."""
    return raw.split("\n", 1)[0].strip() or fallback
