import logging
from typing import Optional

from ..events import CoinsChanged, EventBus
from ..persistence.models import MAX_COINS
from ..persistence.store import SaveStore

logger = logging.getLogger(__name__)


def _clamp_coins(value: int) -> int:
    return max(0, min(MAX_COINS, int(value)))


class EconomyLedger:
    """Coin balance operations on top of the SaveStore.

    Every change is persisted immediately, then announced with CoinsChanged.
    Invalid amounts are clamped rather than rejected.
    """

    def __init__(self, store: SaveStore, bus: Optional[EventBus] = None) -> None:
        self.store = store
        self.bus = bus

    def get_coins(self) -> int:
        return self.store.data.coins

    def has_coins(self, amount: int) -> bool:
        return self.get_coins() >= max(0, amount)

    def try_spend(self, amount: int) -> bool:
        """Deduct amount if affordable. Returns False and leaves the balance untouched otherwise."""
        amount = max(0, amount)
        if not self.has_coins(amount):
            logger.debug("Spend refused: have %s, need %s", self.get_coins(), amount)
            return False
        if amount == 0:
            return True
        self._apply(self.get_coins() - amount, reason="spend")
        return True

    def add_coins(self, amount: int, reason: str = "add") -> int:
        """Add (or, with a negative amount, remove) coins. Returns the new balance."""
        return self._apply(self.get_coins() + amount, reason=reason)

    def set_coins(self, value: int, reason: str = "set") -> int:
        return self._apply(value, reason=reason)

    def grant_signup_bonus_once(self, amount: int) -> bool:
        """Credit the signup bonus exactly once per save lifetime."""
        data = self.store.data
        if data.signup_bonus_claimed:
            return False
        data.signup_bonus_claimed = True
        self._apply(data.coins + amount, reason="signup_bonus")
        logger.info("Signup bonus of %s coins granted", amount)
        return True

    def _apply(self, new_value: int, reason: str) -> int:
        data = self.store.data
        old = data.coins
        data.coins = _clamp_coins(new_value)
        self.store.save()
        logger.debug("Coins %s: old=%s new=%s", reason, old, data.coins)
        if self.bus is not None:
            self.bus.emit(
                CoinsChanged(old_amount=old, new_amount=data.coins, delta=data.coins - old, reason=reason)
            )
        return data.coins
