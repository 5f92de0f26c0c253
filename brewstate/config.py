from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict, BaseSettings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class MachineSettings(BaseSettings):
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    log_ring_size: int = Field(200, gt=0, validation_alias="LOG_RING_SIZE")

    prompt: str = Field("Select an action: ", validation_alias="PROMPT")
    # Stop the console loop after this many accepted actions; None runs until input ends.
    max_actions: Optional[int] = Field(None, validation_alias="MAX_ACTIONS")
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(LOG_LEVELS)}, got {value!r}")
        return level


@lru_cache
def get_settings() -> MachineSettings:
    return MachineSettings()
