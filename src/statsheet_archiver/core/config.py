from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STATSHEET_", env_file=".env", env_file_encoding="utf-8"
    )

    # remote database API
    base_url: str = "https://www.blaseball.com/database"
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0
    max_concurrent_requests: int = Field(default=32, ge=1)

    # pipeline shape
    days_per_season: int = Field(default=99, ge=1)
    team_batch_size: int = Field(default=5, ge=1)

    # output
    output_dir: Path = Path("out")
    max_concurrent_writes: int = Field(default=64, ge=1)

    log_level: str = "INFO"


settings = Settings()
