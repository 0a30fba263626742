"""Runtime settings, read from the environment."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StatewalkSettings(BaseSettings):
    """Settings for statewalk.

    Every field can be set through an environment variable prefixed with
    ``STATEWALK_`` (e.g. ``STATEWALK_COLOR=never``).
    """

    model_config = SettingsConfigDict(
        env_prefix="STATEWALK_",
        extra="ignore",
    )

    color: Literal["auto", "always", "never"] = Field(
        default="auto",
        description="Whether failure traces are decorated with ANSI colors",
    )
    max_states: int = Field(
        default=10_000,
        ge=1,
        description="Upper bound on distinct states visited while exploring a machine",
    )


@lru_cache(maxsize=1)
def get_settings() -> StatewalkSettings:
    """Return the process-wide settings instance."""
    return StatewalkSettings()
