from functools import lru_cache
from typing import Annotated

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_SENTIMENT_MODEL_URL = (
    "https://api-inference.huggingface.co/models/nlptown/bert-base-multilingual-uncased-sentiment"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        validate_by_name=True,
        populate_by_name=True,
    )
    database_url: str = "sqlite:///./reviews.db"

    huggingface_token: str = Field(
        default="",
        validation_alias=AliasChoices("HUGGINGFACE_TOKEN", "HF_TOKEN"),
    )
    sentiment_model_url: str = DEFAULT_SENTIMENT_MODEL_URL
    sentiment_timeout_seconds: float = Field(default=8.0, gt=0)

    log_level: str = "INFO"
    docs_enabled: bool = True
    openapi_enabled: bool = True
    expose_error_details: bool = False

    cors_allow_origins: Annotated[list[str], NoDecode] = Field(default_factory=list)
    cors_allow_methods: Annotated[list[str], NoDecode] = Field(default_factory=lambda: [
        "GET",
        "POST",
        "PUT",
        "DELETE",
        "OPTIONS",
    ])

    @field_validator("cors_allow_origins", "cors_allow_methods", mode="before")
    @classmethod
    def _split_csv(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            if value.strip() == "":
                return []
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @property
    def sentiment_api_enabled(self) -> bool:
        return bool(self.huggingface_token.strip())


@lru_cache
def get_settings() -> Settings:
    return Settings()
