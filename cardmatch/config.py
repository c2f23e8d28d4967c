"""Environment-driven settings for the card detection service."""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Load environment variables from .env file
load_dotenv()

DEFAULT_CANDIDATE_LIMIT = 50
DEFAULT_BATCH_DELAY_SECONDS = 0.1


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


class Settings(BaseModel):
    """Runtime settings, read once from the environment."""

    model_config = ConfigDict(frozen=True)

    supabase_url: Optional[str] = Field(None, description="Catalog database URL")
    supabase_service_key: Optional[str] = Field(
        None, description="Catalog database service key"
    )
    catalog_candidate_limit: int = Field(
        DEFAULT_CANDIDATE_LIMIT,
        description="Hard cap on catalog candidates fetched per listing",
        ge=1,
    )
    batch_delay_seconds: float = Field(
        DEFAULT_BATCH_DELAY_SECONDS,
        description="Pause between listings when processing a batch",
        ge=0,
    )
    log_level: str = Field("INFO", description="Log level for cardmatch loggers")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            supabase_url=os.environ.get("SUPABASE_URL"),
            supabase_service_key=os.environ.get("SUPABASE_SERVICE_KEY"),
            catalog_candidate_limit=max(
                1, _env_int("CATALOG_CANDIDATE_LIMIT", DEFAULT_CANDIDATE_LIMIT)
            ),
            batch_delay_seconds=max(
                0.0, _env_float("BATCH_DELAY_SECONDS", DEFAULT_BATCH_DELAY_SECONDS)
            ),
            log_level=(os.environ.get("LOG_LEVEL") or "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
