from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..config import EconomyConfig
from .ledger import EconomyLedger

if TYPE_CHECKING:  # pragma: no cover
    from ..progression.tracker import ProgressionTracker

logger = logging.getLogger(__name__)


class EntryStatus(str, Enum):
    OK = "ok"
    LOCKED = "locked"
    NO_CONTENT = "no_content"
    INSUFFICIENT_COINS = "insufficient_coins"


@dataclass(frozen=True)
class EntryResult:
    status: EntryStatus
    cost: int = 0
    have: int = 0

    @property
    def allowed(self) -> bool:
        return self.status is EntryStatus.OK

    @property
    def missing(self) -> int:
        if self.status is not EntryStatus.INSUFFICIENT_COINS:
            return 0
        return max(0, self.cost - self.have)


class LevelEntryGate:
    """Charges the level entry cost before a round may start.

    The charge is final: quitting a round mid-way does not refund it.
    """

    def __init__(self, tracker: "ProgressionTracker", ledger: EconomyLedger, config: EconomyConfig) -> None:
        self.tracker = tracker
        self.ledger = ledger
        self.config = config

    def check(self, category_id: str, level_index: int) -> EntryResult:
        """Report whether entry would succeed, without charging."""
        cost = self.config.level_entry_cost
        have = self.ledger.get_coins()
        if not self.tracker.level_has_content(category_id, level_index):
            return EntryResult(EntryStatus.NO_CONTENT, cost, have)
        if level_index > self.tracker.get_unlocked_level_count(category_id):
            return EntryResult(EntryStatus.LOCKED, cost, have)
        if not self.ledger.has_coins(cost):
            return EntryResult(EntryStatus.INSUFFICIENT_COINS, cost, have)
        return EntryResult(EntryStatus.OK, cost, have)

    def try_enter(self, category_id: str, level_index: int) -> EntryResult:
        result = self.check(category_id, level_index)
        if not result.allowed:
            logger.info(
                "Entry to %s level %s refused: %s (cost=%s have=%s)",
                category_id,
                level_index,
                result.status.value,
                result.cost,
                result.have,
            )
            return result
        self.ledger.try_spend(result.cost)
        return result
