"""Configuration for the conquest engine."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from the environment or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="CONQUEST_"
    )

    data_dir: Path = Field(default=Path("worlds"), description="Where entity documents live")
    rules_version: str = Field(default="1.0", description="Ruleset version used by the domain")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )
    apply_court_power_modifier: bool = Field(
        default=False,
        description="Fold the court's battle power modifier into player power",
    )
    item_drop_seed_salt: str = Field(
        default="item-drop", description="Salt mixed into deterministic item drop seeds"
    )


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Explicit switches handed to services at construction time.

    Services never consult the environment directly; every recognized key is
    listed here with its default.
    """

    apply_court_power_modifier: bool = False
    item_drop_seed_salt: str = "item-drop"

    @classmethod
    def from_settings(cls, settings: Settings) -> EngineConfig:
        return cls(
            apply_court_power_modifier=settings.apply_court_power_modifier,
            item_drop_seed_salt=settings.item_drop_seed_salt,
        )


DEFAULT_ENGINE_CONFIG = EngineConfig()


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    settings = Settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
