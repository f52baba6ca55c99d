from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "QUIZ_SAVE_V1"


class EconomyConfig(BaseModel):
    """Coin economy knobs. Defaults are sensible if no config file is present."""

    signup_bonus_coins: int = Field(100, ge=0, description="One-time bonus on first login")
    level_entry_cost: int = Field(5, ge=0, description="Coins charged to start a level")
    ad_coins_reward: int = Field(20, ge=0, description="Coins granted per completed rewarded ad")
    ad_retry_cooldown_seconds: int = Field(0, ge=0, description="0 = unlimited")
    coins_per_correct_answer: int = Field(1, ge=0)
    coin_packs: Dict[str, int] = Field(
        default_factory=lambda: {"small": 100, "medium": 300, "large": 1000},
        description="Shop pack name -> coins granted",
    )

    @field_validator("coin_packs")
    @classmethod
    def packs_non_negative(cls, v: Dict[str, int]) -> Dict[str, int]:
        for name, coins in v.items():
            if coins < 0:
                raise ValueError(f"coin pack '{name}' cannot grant negative coins")
        return dict(v)


class RoundConfig(BaseModel):
    """Round sizing and pass criteria."""

    questions_per_round: int = Field(10, ge=1)
    unlock_threshold: int = Field(8, ge=0)
    seconds_per_question: float = Field(15.0, gt=0)

    @model_validator(mode="after")
    def threshold_fits_round(self) -> "RoundConfig":
        if self.unlock_threshold > self.questions_per_round:
            raise ValueError("unlock_threshold cannot exceed questions_per_round")
        return self


class GameConfig(BaseModel):
    economy: EconomyConfig = Field(default_factory=EconomyConfig)
    round: RoundConfig = Field(default_factory=RoundConfig)
    storage_key: str = Field(DEFAULT_STORAGE_KEY, min_length=1)


def load_config(path: Optional[Path]) -> GameConfig:
    """Load a GameConfig from JSON. Missing fields fall back to defaults.

    A missing file yields defaults; an unreadable or invalid one raises ConfigError.
    """
    if path is None:
        return GameConfig()
    path = Path(path)
    if not path.exists():
        logger.warning("Game config not found at %s; using defaults", path)
        return GameConfig()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e
    try:
        cfg = GameConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e
    logger.info("Loaded game config from %s", path)
    return cfg


def load_config_or_default(path: Optional[Path]) -> GameConfig:
    try:
        return load_config(path)
    except ConfigError:
        logger.exception("Falling back to default game config")
        return GameConfig()
