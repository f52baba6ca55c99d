import logging
from typing import Optional

from ..events import EventBus, RoundCompleted
from ..progression.tracker import ProgressionTracker
from .models import RoundOutcome

logger = logging.getLogger(__name__)

# Guards the "improved" signal against float noise in percent comparisons.
IMPROVEMENT_EPSILON = 1e-4


class RoundOutcomeEvaluator:
    """Decides unlock, completion and improvement after a round.

    Must run after every MarkCorrect of the round has been applied. Mutation
    goes through the tracker; presentation is left to the caller.
    """

    def __init__(self, tracker: ProgressionTracker, bus: Optional[EventBus] = None) -> None:
        self.tracker = tracker
        self.bus = bus

    def evaluate(
        self,
        category_id: str,
        level_index: int,
        correct_this_round: int,
        unlock_threshold: int,
        percent_before: float,
        round_size: int = 0,
    ) -> RoundOutcome:
        success = correct_this_round >= unlock_threshold
        level_now_complete = self.tracker.is_level_complete(category_id, level_index)

        just_unlocked = False
        if success:
            just_unlocked = self.tracker.unlock_next_level_if_complete(category_id, level_index)

        percent_after = self.tracker.get_category_percent(category_id)
        improved = percent_after > percent_before + IMPROVEMENT_EPSILON

        outcome = RoundOutcome(
            success=success,
            level_now_complete=level_now_complete,
            just_unlocked=just_unlocked,
            percent_after=percent_after,
            improved=improved,
            correct_this_round=correct_this_round,
            round_size=round_size,
        )
        logger.info(
            "Round finished in '%s' level %s: %s/%s correct, complete=%s unlocked=%s percent=%.1f",
            category_id,
            level_index,
            correct_this_round,
            round_size,
            level_now_complete,
            just_unlocked,
            percent_after,
        )
        if self.bus is not None:
            self.bus.emit(RoundCompleted(category_id=category_id, level_index=level_index, outcome=outcome))
        return outcome
