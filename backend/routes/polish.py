import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from gemini.fallback import FallbackCaller
from gemini.prompts import polish_prompt
from models.generation import GenerationParams
from postprocess import first_line
from routes.deps import get_caller

logger = logging.getLogger(__name__)

router = APIRouter(tags=["polish"])

POLISH_PARAMS = GenerationParams(temperature=0.5, max_output_tokens=120)


# ---------- Request / Response schemas ----------

class PolishRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sentence: Optional[str] = None
    slide_title: Optional[str] = Field(default=None, alias="slideTitle")
    temperature: Optional[float] = None


class PolishResponse(BaseModel):
    polished: str


# ---------- Endpoint ----------

@router.post("/api/polish-sentence", response_model=PolishResponse)
async def polish_sentence(body: PolishRequest, caller: FallbackCaller = Depends(get_caller)):
    """
    Rewrites one narration sentence in a warm, spoken-friendly register.

    Never fails once the input is valid: if Gemini is unavailable the
    original sentence is returned unchanged.
    """
    if not (body.sentence or "").strip():
        raise HTTPException(status_code=400, detail="sentence is required")

    temperature = body.temperature if body.temperature is not None else POLISH_PARAMS.temperature
    prompt = polish_prompt(body.sentence, body.slide_title)

    try:
        raw = await caller.call(prompt, temperature, POLISH_PARAMS.max_output_tokens)
    except Exception:
        logger.warning("Polish failed — returning original sentence", exc_info=True)
        return PolishResponse(polished=body.sentence)

    return PolishResponse(polished=first_line(raw, body.sentence))
