import logging
import time
from typing import Callable, Optional

from ..config import EconomyConfig
from .ledger import EconomyLedger

logger = logging.getLogger(__name__)


class RewardService:
    """Coin grants that originate outside a round: rewarded ads and shop packs.

    Ad completion arrives as a success/failure notification from the ad SDK;
    nothing here waits on it.
    """

    def __init__(
        self,
        ledger: EconomyLedger,
        config: EconomyConfig,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.ledger = ledger
        self.config = config
        self._clock = clock or time.monotonic
        self._last_ad_reward_at: Optional[float] = None

    def ad_reward_available(self) -> bool:
        cooldown = self.config.ad_retry_cooldown_seconds
        if cooldown <= 0 or self._last_ad_reward_at is None:
            return True
        return self._clock() - self._last_ad_reward_at >= cooldown

    def grant_ad_reward(self, success: bool) -> int:
        """Credit the ad reward if the ad completed. Returns coins granted."""
        if not success:
            logger.info("Rewarded ad not completed; no coins granted")
            return 0
        if not self.ad_reward_available():
            logger.info("Rewarded ad on cooldown; no coins granted")
            return 0
        amount = self.config.ad_coins_reward
        self.ledger.add_coins(amount, reason="ad_reward")
        self._last_ad_reward_at = self._clock()
        return amount

    def purchase_pack(self, pack: str) -> int:
        """Credit a shop coin pack by name. Unknown packs grant nothing."""
        amount = self.config.coin_packs.get(pack)
        if amount is None:
            logger.warning("Unknown coin pack '%s'", pack)
            return 0
        self.ledger.add_coins(amount, reason=f"pack:{pack}")
        logger.info("Player bought %s coins (%s pack)", amount, pack)
        return amount
