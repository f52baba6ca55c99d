from .gate import EntryResult, EntryStatus, LevelEntryGate
from .ledger import EconomyLedger
from .rewards import RewardService

__all__ = [
    "EconomyLedger",
    "LevelEntryGate",
    "EntryResult",
    "EntryStatus",
    "RewardService",
]
