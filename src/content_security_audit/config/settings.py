"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]


class Settings(BaseSettings):
    """Environment-driven audit log settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: NonEmptyStr = Field(validation_alias="DATABASE_URL")
    audit_activity_type_name: NonEmptyStr = Field(
        default="ContentSecurity",
        validation_alias="AUDIT_ACTIVITY_TYPE_NAME",
    )
    audit_log_messages: bool = Field(default=True, validation_alias="AUDIT_LOG_MESSAGES")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()  # type: ignore[call-arg]
