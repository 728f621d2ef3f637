import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from gemini.fallback import AllModelsUnavailableError, FallbackCaller
from gemini.prompts import chat_prompt
from models.generation import GenerationParams
from routes.deps import get_caller

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

# Low temperature, short ceiling: replies are 2-3 sentences
CHAT_PARAMS = GenerationParams(temperature=0.5, max_output_tokens=150)


# ---------- Request / Response schemas ----------

class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: Optional[str] = None
    slide_title: Optional[str] = Field(default=None, alias="slideTitle")


class ChatResponse(BaseModel):
    reply: str


# ---------- Endpoint ----------

@router.post("/api/chat", response_model=ChatResponse)
async def chat(body: ChatRequest, caller: FallbackCaller = Depends(get_caller)):
    """
    Answers a learner's question in 2-3 polite sentences.
    The current slide title is passed as context only.
    """
    if not (body.question or "").strip():
        raise HTTPException(status_code=400, detail="question is required")

    prompt = chat_prompt(body.question, body.slide_title)

    try:
        reply = await caller.call(prompt, CHAT_PARAMS.temperature, CHAT_PARAMS.max_output_tokens)
    except AllModelsUnavailableError as exc:
        logger.warning("Chat reply unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    return ChatResponse(reply=reply)
