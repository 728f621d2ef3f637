from pydantic import BaseModel, ConfigDict


class GenerationParams(BaseModel):
    """Sampling settings for one generation call."""

    model_config = ConfigDict(frozen=True)

    temperature: float
    max_output_tokens: int
