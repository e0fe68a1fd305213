"""Package configuration."""

from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class ExcessKeyPolicy(str, Enum):
    """What lowering does with non-string keys inside a patch value."""

    ERROR = "error"
    DROP = "drop"


class Settings(BaseSettings):
    """Settings loaded from SHAPEDIFF_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SHAPEDIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # JSON Patch lowering
    json_allow_nan: bool = False
    excess_key_policy: ExcessKeyPolicy = ExcessKeyPolicy.ERROR


settings = Settings()
