from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import EconomyConfig, RoundConfig
from ..economy.ledger import EconomyLedger
from ..progression.tracker import ProgressionTracker
from .builder import RoundBuilder
from .models import Round, RoundOutcome, RoundQuestion
from .outcome import RoundOutcomeEvaluator
from .timer import QuestionTimer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnswerResult:
    question_id: str
    correct: bool
    chosen_slot: int
    correct_slot: int
    timed_out: bool = False
    coins_awarded: int = 0


class QuizSession:
    """Question flow for one round of one level.

    The host drives it: `start()`, then per question `answer(slot)` or
    `tick(dt)` until the timer runs out, then `advance()`; `finish()` once
    `advance()` reports the round is over. Feedback delays between questions
    belong to the presentation layer.
    """

    def __init__(
        self,
        category_id: str,
        level_index: int,
        *,
        tracker: ProgressionTracker,
        ledger: EconomyLedger,
        builder: RoundBuilder,
        evaluator: RoundOutcomeEvaluator,
        round_config: Optional[RoundConfig] = None,
        economy_config: Optional[EconomyConfig] = None,
        target_count: Optional[int] = None,
    ) -> None:
        self.category_id = category_id
        self.level_index = level_index
        self.tracker = tracker
        self.ledger = ledger
        self.builder = builder
        self.evaluator = evaluator
        self.round_config = round_config or RoundConfig()
        self.economy_config = economy_config or EconomyConfig()
        self.target_count = target_count
        self.timer = QuestionTimer(self.round_config.seconds_per_question)

        self.round: Optional[Round] = None
        self.percent_before = 0.0
        self.correct_count = 0
        self._index = -1
        self._answered = False
        self._outcome: Optional[RoundOutcome] = None

    # ---------- Lifecycle ----------
    def start(self) -> Round:
        if self.round is not None:
            return self.round
        self.percent_before = self.tracker.get_category_percent(self.category_id)
        self.round = self.builder.build(self.category_id, self.level_index, self.target_count)
        if self.round.is_empty:
            logger.warning(
                "No questions for '%s' level %s (%s)",
                self.category_id,
                self.level_index,
                self.round.status.value,
            )
            self._index = 0
            return self.round
        self._present(0)
        return self.round

    def advance(self) -> Optional[RoundQuestion]:
        """Move to the next question. Returns None when the round is over."""
        if self.round is None or self.is_over:
            return None
        nxt = self._index + 1
        if nxt >= len(self.round):
            self._index = len(self.round)
            self.timer.stop()
            return None
        self._present(nxt)
        return self.current

    def finish(self) -> RoundOutcome:
        """Evaluate the round once; later calls return the same outcome."""
        if self._outcome is not None:
            return self._outcome
        self.timer.stop()
        size = len(self.round) if self.round is not None else 0
        self._outcome = self.evaluator.evaluate(
            self.category_id,
            self.level_index,
            correct_this_round=self.correct_count,
            unlock_threshold=self.round_config.unlock_threshold,
            percent_before=self.percent_before,
            round_size=size,
        )
        return self._outcome

    # ---------- Answers ----------
    def answer(self, slot: int) -> Optional[AnswerResult]:
        """Judge a pressed answer slot; None if no question is awaiting an answer."""
        q = self.current
        if q is None or self._answered:
            return None
        self._answered = True
        self.timer.stop()

        correct = q.is_correct(slot)
        coins = 0
        if correct:
            self.correct_count += 1
            self.tracker.mark_correct(self.category_id, q.id)
            coins = self.economy_config.coins_per_correct_answer
            if coins:
                self.ledger.add_coins(coins, reason="correct_answer")
        return AnswerResult(q.id, correct, slot, q.correct_slot, coins_awarded=coins)

    def timeout(self) -> Optional[AnswerResult]:
        """Record the current question as missed (counts as incorrect)."""
        q = self.current
        if q is None or self._answered:
            return None
        self._answered = True
        self.timer.stop()
        logger.debug("Question %s timed out", q.id)
        return AnswerResult(q.id, False, -1, q.correct_slot, timed_out=True)

    def tick(self, dt: float) -> Optional[AnswerResult]:
        if self.timer.tick(dt):
            return self.timeout()
        return None

    # ---------- State ----------
    @property
    def current(self) -> Optional[RoundQuestion]:
        if self.round is None or not 0 <= self._index < len(self.round):
            return None
        return self.round.questions[self._index]

    @property
    def awaiting_answer(self) -> bool:
        return self.current is not None and not self._answered

    @property
    def is_over(self) -> bool:
        return self.round is not None and self._index >= len(self.round)

    @property
    def position(self) -> int:
        """1-based number of the question on screen (0 before start)."""
        if self.round is None:
            return 0
        return max(0, min(self._index + 1, len(self.round)))

    @property
    def counter_text(self) -> str:
        total = max(1, len(self.round)) if self.round is not None else 1
        return f"{self.position}/{total}"

    def _present(self, index: int) -> None:
        assert self.round is not None
        self._index = index
        self._answered = False
        q = self.round.questions[index]
        self.tracker.mark_seen(self.category_id, q.id)
        self.timer.reset()
