"""quizcore: progression, economy and round selection for a trivia game."""

__version__ = "0.3.0"

from .app import GameContext
from .catalog import Category, ContentCatalog, Level, Question
from .config import EconomyConfig, GameConfig, RoundConfig
from .events import (
    CategoryProgressChanged,
    CoinsChanged,
    EventBus,
    LevelUnlocked,
    RoundCompleted,
)
from .rounds import Round, RoundOutcome, RoundQuestion

__all__ = [
    "__version__",
    "GameContext",
    "Category",
    "ContentCatalog",
    "Level",
    "Question",
    "EconomyConfig",
    "GameConfig",
    "RoundConfig",
    "EventBus",
    "CoinsChanged",
    "RoundCompleted",
    "LevelUnlocked",
    "CategoryProgressChanged",
    "Round",
    "RoundQuestion",
    "RoundOutcome",
]
