"""
Process-wide configuration, read once at startup.

main.py calls load_dotenv() first, so values may come from backend/.env.
The resulting Settings value is passed to create_app(); nothing else reads
the environment.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini.config import model_chain

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # Server
    port: int = Field(4000, alias="PORT", ge=1, le=65535)
    frontend_url: str = Field("*", alias="FRONTEND_URL")    # allowed CORS origin

    # Gemini
    gemini_api_key: str = Field("", alias="GEMINI_API_KEY")
    gemini_model: Optional[str] = Field(None, alias="GEMINI_MODEL")

    # Logging
    log_level: LogLevel = Field("INFO", alias="LOG_LEVEL")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @property
    def gemini_models(self) -> tuple[str, ...]:
        return model_chain(self.gemini_model)


def load_settings() -> Settings:
    return Settings()
