"""Packager configuration loaded from the environment."""

from functools import lru_cache
from typing import ClassVar, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PackagerSettings(BaseSettings):
    """Settings for the packager CLI."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="PNPM_PACKAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="WARNING", description="Log level for packager output.")
    log_format: Literal["console", "json"] = Field(
        default="console", description="Log renderer: console or json."
    )
    default_depth: int = Field(
        default=1, ge=1, description="Depth used when listing dependencies."
    )


@lru_cache(maxsize=1)
def get_settings() -> PackagerSettings:
    return PackagerSettings()
