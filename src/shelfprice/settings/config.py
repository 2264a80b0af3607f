"""Configuration loader for shelfprice using Pydantic settings.

Config precedence (highest wins):
  1. CLI flags (where applicable)
  2. Environment variables (SHELFPRICE_* with __ for nesting)
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
PROJECT_ROOT = Path(os.getenv("SHELFPRICE_PROJECT_ROOT", _THIS_DIR.parents[2]))
CONFIG_DIR = PROJECT_ROOT / "config"

ENV_VAR_NAME = "SHELFPRICE_ENV"
DEFAULT_ENV = "local"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
)


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
    """Playwright browser settings."""

    model_config = SettingsConfigDict(env_prefix="SHELFPRICE_BROWSER__")

    headless: bool = True
    timeout_ms: int = 30_000
    user_agent: str = DEFAULT_USER_AGENT
    viewport_width: int = 1920
    viewport_height: int = 1080
    device_scale_factor: float = 1
    channel: str = ""  # e.g. "chrome" to drive an installed Chrome instead of bundled Chromium

    @field_validator("timeout_ms", "viewport_width", "viewport_height")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value


class OutputSettings(BaseSettings):
    """Where run artifacts are written."""

    model_config = SettingsConfigDict(env_prefix="SHELFPRICE_OUTPUT__")

    screenshot_path: str = "screenshot.jpg"
    product_path: str = "product.txt"


class SelectorSettings(BaseSettings):
    """CSS selectors for the storefront's region picker and product card."""

    model_config = SettingsConfigDict(env_prefix="SHELFPRICE_SELECTORS__")

    region_icon: str = ".Region_regionIcon__oZ0Rt"
    region_item: str = ".UiRegionListBase_item___ly_A"
    price_regular: str = ".Price_price__QzA8L.Price_size_XL__MHvC1.Price_role_regular__X6X4D"
    price_discount: str = ".Price_price__QzA8L.Price_size_XL__MHvC1.Price_role_discount__l_tpE"
    price_old: str = ".Price_price__QzA8L.Price_size_XS__ESEhJ.Price_role_old__r1uT1"
    rating: str = ".ActionsRow_stars__EKt42"
    reviews: str = ".ActionsRow_reviews__AfSj_"

    def product_fields(self) -> dict[str, str]:
        """Return the selectors read from the product card, keyed by raw field name."""
        return {
            "price_regular": self.price_regular,
            "price_discount": self.price_discount,
            "price_old": self.price_old,
            "rating": self.rating,
            "reviews": self.reviews,
        }


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root shelfprice settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="SHELFPRICE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    env: str = Field(default_factory=_resolve_env)
    project_root: Path = Field(default=PROJECT_ROOT)
    log_level: str = "INFO"

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    selectors: SelectorSettings = Field(default_factory=SelectorSettings)

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

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings instance (cached)."""
    return Settings()
