"""Application configuration utilities."""

from __future__ import annotations

from functools import lru_cache
import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError


class Settings(BaseModel):
    """Centralized runtime configuration loaded from environment variables."""

    app_name: str = "Z-Wave Cards Backend"
    environment: str = "development"
    log_level: str = "INFO"
    compact_breakpoint_px: int = Field(default=450, gt=0)
    resize_debounce_ms: int = Field(default=100, ge=0)
    search_min_score: int = Field(default=65, ge=0, le=100)
    search_limit: int = Field(default=5, ge=1)

    class Config:
        extra = "ignore"

    @property
    def resize_debounce_seconds(self) -> float:
        return self.resize_debounce_ms / 1000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load environment variables and validate them."""

    load_dotenv()
    data: dict[str, Any] = {
        "app_name": os.getenv("APP_NAME", "Z-Wave Cards Backend"),
        "environment": os.getenv("ENVIRONMENT", "development"),
        "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
        "compact_breakpoint_px": os.getenv("COMPACT_BREAKPOINT_PX", "450"),
        "resize_debounce_ms": os.getenv("RESIZE_DEBOUNCE_MS", "100"),
        "search_min_score": os.getenv("SEARCH_MIN_SCORE", "65"),
        "search_limit": os.getenv("SEARCH_LIMIT", "5"),
    }

    try:
        return Settings(**data)
    except ValidationError as exc:
        raise RuntimeError("Invalid environment configuration") from exc
