"""Configuration management for the EPF engine."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

OUTPUT_FORMATS = ("text", "json")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    engine_version: str
    log_level: str
    output_format: str
    debug: bool

    @property
    def effective_log_level(self) -> int:
        """Numeric log level, forced to DEBUG in debug mode."""
        if self.debug:
            return logging.DEBUG
        return getattr(logging, self.log_level.upper(), logging.WARNING)

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        output_format = os.getenv("EPF_OUTPUT_FORMAT", "text").lower()
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"EPF_OUTPUT_FORMAT must be one of {OUTPUT_FORMATS}, got '{output_format}'"
            )

        return cls(
            engine_version=os.getenv("EPF_ENGINE_VERSION", "1.0.0"),
            log_level=os.getenv("EPF_LOG_LEVEL", "WARNING"),
            output_format=output_format,
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
