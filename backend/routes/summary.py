import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from gemini.fallback import AllModelsUnavailableError, FallbackCaller
from gemini.prompts import summary_prompt
from models.generation import GenerationParams
from postprocess import (
    MalformedGenerationError,
    parse_summary,
    shape_description,
    shape_key_points,
)
from routes.deps import get_caller

logger = logging.getLogger(__name__)

router = APIRouter(tags=["summary"])

SUMMARY_PARAMS = GenerationParams(temperature=0.7, max_output_tokens=200)


# ---------- Request / Response schemas ----------

class SummaryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    slide_title: Optional[str] = Field(default=None, alias="slideTitle")
    slide_description: Optional[str] = Field(default=None, alias="slideDescription")
    slide_key_points: Optional[list[str]] = Field(default=None, alias="slideKeyPoints")


class SummaryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: str
    key_points: list[str] = Field(alias="keyPoints")


# ---------- Endpoint ----------

@router.post("/api/summary", response_model=SummaryResponse)
async def summary(body: SummaryRequest, caller: FallbackCaller = Depends(get_caller)):
    """
    Generates a fresh one-sentence description and four key points for a slide.

    The existing slide text is only used to tell Gemini what wording to avoid.
    Word and sentence caps are enforced locally on whatever Gemini returns.
    """
    if not (body.slide_title or "").strip():
        raise HTTPException(status_code=400, detail="slideTitle is required")

    prompt = summary_prompt(body.slide_title, body.slide_description, body.slide_key_points)

    try:
        raw = await caller.call(prompt, SUMMARY_PARAMS.temperature, SUMMARY_PARAMS.max_output_tokens)
        parsed = parse_summary(raw)
        description = shape_description(parsed.description)
        key_points = shape_key_points(parsed.key_points)
    except (AllModelsUnavailableError, MalformedGenerationError) as exc:
        logger.warning("Summary unavailable for %r: %s", body.slide_title, exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    return SummaryResponse(description=description, key_points=key_points)
