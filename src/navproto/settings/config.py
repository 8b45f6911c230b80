"""Configuration loader for navproto using Pydantic settings.

Config precedence (highest wins):
  1. Explicit keyword arguments
  2. Environment variables (NAVPROTO_* with __ for nesting)
  3. settings.local.toml
  4. settings.<env>.toml
  5. settings.default.toml
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

_THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = Path(os.getenv("NAVPROTO_PROJECT_ROOT", _THIS_DIR.parents[2]))
CONFIG_DIR = PROJECT_ROOT / "config"

ENV_VAR_NAME = "NAVPROTO_ENV"
DEFAULT_ENV = "local"


def _resolve_env() -> str:
    return (os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()


def _load_toml(path: Path) -> dict[str, Any]:
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class BrowserSettings(BaseSettings):
    """Polling configuration applied to every session."""

    model_config = SettingsConfigDict(env_prefix="NAVPROTO_BROWSER__")

    timeout_ms: int = 10_000
    poll_interval_ms: int = 500

    @field_validator("timeout_ms", "poll_interval_ms")
    @classmethod
    def non_negative(cls, v: int) -> int:
        """Reject negative durations."""
        if v < 0:
            raise ValueError("durations must be >= 0")
        return v


class ScreenshotSettings(BaseSettings):
    """Where and how screenshots are written."""

    model_config = SettingsConfigDict(env_prefix="NAVPROTO_SCREENSHOTS__")

    output_dir: str = "target/log"
    full_page: bool = False


class ScrollSettings(BaseSettings):
    """Scroll-until-end loop tuning."""

    model_config = SettingsConfigDict(env_prefix="NAVPROTO_SCROLL__")

    settle_delay_ms: int = 1000
    max_steps: int = 0  # 0 = no cap


class HighlightSettings(BaseSettings):
    """Visual debugging highlight."""

    model_config = SettingsConfigDict(env_prefix="NAVPROTO_HIGHLIGHT__")

    duration_ms: int = 2000
    style: str = "background: yellow;"


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root navproto settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="NAVPROTO_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    env: str = Field(default_factory=_resolve_env)
    project_root: Path = Field(default=PROJECT_ROOT)
    debug: bool = False
    log_level: str = "INFO"

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    screenshots: ScreenshotSettings = Field(default_factory=ScreenshotSettings)
    scroll: ScrollSettings = Field(default_factory=ScrollSettings)
    highlight: HighlightSettings = Field(default_factory=HighlightSettings)

    @model_validator(mode="before")
    @classmethod
    def _merge_toml_files(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Layer TOML config files before env var overrides."""
        defaults = _load_toml(CONFIG_DIR / "settings.default.toml")
        env_name = (values.get("env") or os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()
        env_overrides = _load_toml(CONFIG_DIR / f"settings.{env_name}.toml")
        local_overrides = _load_toml(CONFIG_DIR / "settings.local.toml")

        # Merge: defaults < env-specific < local < explicit values
        merged: dict[str, Any] = {}
        for layer in (defaults, env_overrides, local_overrides, values):
            for key, val in layer.items():
                if isinstance(val, dict) and isinstance(merged.get(key), dict):
                    merged[key] = {**merged[key], **val}
                else:
                    merged[key] = val
        return merged

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Normalize relative paths against project_root."""
        if not Path(self.screenshots.output_dir).is_absolute():
            self.screenshots.output_dir = str(self.project_root / self.screenshots.output_dir)
        self.log_level = self.log_level.upper()
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings instance (cached)."""
    return Settings()
