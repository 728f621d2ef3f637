from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

KEY_POINT_COUNT = 4


class SlideSummary(BaseModel):
    """Shape the summary prompt asks Gemini to return."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    description: str = Field(min_length=1)
    key_points: list[Annotated[str, Field(min_length=1)]] = Field(
        alias="keyPoints", min_length=KEY_POINT_COUNT
    )
