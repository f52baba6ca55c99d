from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .catalog import ContentCatalog, load_catalog_dir
from .config import GameConfig, load_config_or_default
from .economy import EconomyLedger, LevelEntryGate, RewardService
from .events import EventBus
from .persistence import FileStorage, KeyValueStorage, SaveStore
from .profile import ProfileService
from .progression import ProgressionTracker
from .rounds import QuizSession, RoundBuilder, RoundOutcomeEvaluator
from .utils.random_provider import RandomProvider

logger = logging.getLogger(__name__)


@dataclass
class GameContext:
    """Explicitly constructed owner of every core service for one player session.

    Replaces process-wide singletons: create one at boot and pass it (or its
    members) to whatever needs them.
    """

    config: GameConfig
    catalog: ContentCatalog
    bus: EventBus
    store: SaveStore
    ledger: EconomyLedger
    tracker: ProgressionTracker
    builder: RoundBuilder
    evaluator: RoundOutcomeEvaluator
    gate: LevelEntryGate
    rewards: RewardService
    profile: ProfileService

    @classmethod
    def create(
        cls,
        catalog: ContentCatalog,
        storage: KeyValueStorage,
        config: Optional[GameConfig] = None,
        rng: Optional[RandomProvider] = None,
        bus: Optional[EventBus] = None,
    ) -> "GameContext":
        config = config or GameConfig()
        bus = bus or EventBus()
        store = SaveStore(storage, key=config.storage_key, bus=bus)
        store.load()
        ledger = EconomyLedger(store, bus)
        tracker = ProgressionTracker(store, catalog, bus)
        builder = RoundBuilder(
            catalog,
            tracker,
            rng=rng or RandomProvider(),
            default_round_size=config.round.questions_per_round,
        )
        ctx = cls(
            config=config,
            catalog=catalog,
            bus=bus,
            store=store,
            ledger=ledger,
            tracker=tracker,
            builder=builder,
            evaluator=RoundOutcomeEvaluator(tracker, bus),
            gate=LevelEntryGate(tracker, ledger, config.economy),
            rewards=RewardService(ledger, config.economy),
            profile=ProfileService(store),
        )
        logger.info("Game context ready: %d categories, %d coins", len(catalog), ledger.get_coins())
        return ctx

    @classmethod
    def from_paths(
        cls,
        catalog_dir: Union[str, Path],
        save_dir: Union[str, Path, None] = None,
        config_path: Union[str, Path, None] = None,
        rng: Optional[RandomProvider] = None,
    ) -> "GameContext":
        config = load_config_or_default(Path(config_path) if config_path else None)
        catalog = load_catalog_dir(catalog_dir)
        return cls.create(catalog, FileStorage(save_dir), config=config, rng=rng)

    def login(self, name: str) -> str:
        """Set the player name and grant the signup bonus on first login."""
        cleaned = self.profile.set_player_name(name)
        self.ledger.grant_signup_bonus_once(self.config.economy.signup_bonus_coins)
        return cleaned

    def new_session(
        self,
        category_id: str,
        level_index: int,
        target_count: Optional[int] = None,
    ) -> QuizSession:
        return QuizSession(
            category_id,
            level_index,
            tracker=self.tracker,
            ledger=self.ledger,
            builder=self.builder,
            evaluator=self.evaluator,
            round_config=self.config.round,
            economy_config=self.config.economy,
            target_count=target_count,
        )
