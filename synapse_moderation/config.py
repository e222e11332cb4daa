from __future__ import annotations

import os

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenAISettings(BaseModel):
    api_key: str = ""
    base_url: str = "https://api.openai.com/v1"
    model: str = "omni-moderation-latest"
    timeout_seconds: float = Field(default=15.0, gt=0)
    retry_attempts: int = Field(default=3, ge=1)


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Logging level: DEBUG, INFO, WARNING, ERROR")
    use_json: bool = Field(default=False, description="Use JSON format instead of console output")


class ModerationSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SYNAPSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    provider_deadline_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Upper bound for a whole provider attempt, retries included.",
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @model_validator(mode="after")
    def _fallback_api_key(self) -> "ModerationSettings":
        # The mobile build used to ship the key as a plain OPENAI_API_KEY variable.
        if not self.openai.api_key:
            self.openai.api_key = os.getenv("OPENAI_API_KEY", "")
        return self
