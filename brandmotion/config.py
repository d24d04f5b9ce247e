from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    base_url: str = Field(default="http://localhost:8000")
    debug: bool = Field(default=False)

    # Export output (videos are served from <output_dir>/videos)
    output_dir: str = Field(default="./output")

    # Rate limiting for the export endpoint (SlowAPI syntax)
    export_rate_limit: str = Field(default="10/minute")

    # Frame sampler (headless Chromium)
    sampler_headless: bool = Field(default=True)
    sampler_timeout_ms: int = Field(default=30000)


class BrandConfig:
    """Default brand profile from config.yml."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.name: str = data.get("name", "My Brand")
        colors = data.get("colors", {})
        self.primary: str = colors.get("primary", "#0ea5e9")
        self.secondary: str = colors.get("secondary", "#0f172a")
        self.accent: str = colors.get("accent", "#f59e0b")
        self.headline_font: str = data.get("headline_font", "Inter")
        # Personality hint. Kept as data; it does not change scene timing.
        self.tone: str = data.get("tone", "modern")


class RenderConfig:
    """Export pipeline limits and timing from config.yml."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.max_scenes: int = data.get("max_scenes", 10)
        self.max_duration_ms: int = data.get("max_duration_ms", 60000)
        self.tail_padding_seconds: float = data.get("tail_padding_seconds", 1.0)
        self.preview_loop_pause_ms: int = data.get("preview_loop_pause_ms", 500)
        self.output_retention_minutes: int = data.get("output_retention_minutes", 15)
        self.default_quality: str = data.get("default_quality", "medium")
        # Per-quality overrides, e.g. {"high": {"fps": 50, "crf": 18}}
        self.quality_overrides: dict[str, dict[str, int]] = data.get("quality", {})


class AppConfig:
    """Combined application configuration from .env and config.yml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.settings = Settings()
        self._load_yaml(config_path or Path("config.yml"))

    def _load_yaml(self, config_path: Path) -> None:
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        else:
            data = {}

        self.brand = BrandConfig(data.get("brand", {}))
        self.render = RenderConfig(data.get("render", {}))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_config() -> AppConfig:
    """Get cached full config instance."""
    return AppConfig()
