from __future__ import annotations

import logging
from typing import List, Optional, Set

from ..catalog import ContentCatalog, Question
from ..progression.tracker import ProgressionTracker
from ..utils.random_provider import RandomProvider
from .models import Round, RoundQuestion, RoundStatus

logger = logging.getLogger(__name__)


class RoundBuilder:
    """Selects the questions for one play session.

    Unlearned questions come first; already-correct ones only pad the round
    up to its target size. A round never repeats a question ID, so it is
    shorter than requested when the level is small.
    """

    def __init__(
        self,
        catalog: ContentCatalog,
        tracker: ProgressionTracker,
        rng: Optional[RandomProvider] = None,
        default_round_size: int = 10,
    ) -> None:
        self.catalog = catalog
        self.tracker = tracker
        self.rng = rng or RandomProvider()
        self.default_round_size = default_round_size

    def target_size(self, category_id: str) -> int:
        category = self.catalog.get_category(category_id)
        if category is not None and category.questions_per_round:
            return category.questions_per_round
        return self.default_round_size

    def build(self, category_id: str, level_index: int, target_count: Optional[int] = None) -> Round:
        category = self.catalog.get_category(category_id)
        if category is None:
            logger.warning("Round requested for unknown category '%s'", category_id)
            return Round(category_id, level_index, status=RoundStatus.UNKNOWN_CATEGORY)
        level = category.get_level(level_index)
        if level is None:
            logger.warning("Round requested for unknown level %s in '%s'", level_index, category_id)
            return Round(category_id, level_index, status=RoundStatus.UNKNOWN_LEVEL)
        if not level.questions:
            return Round(category_id, level_index, status=RoundStatus.NO_QUESTIONS)

        target = self.target_size(category_id) if target_count is None else max(0, target_count)
        if target <= 0:
            logger.warning("Round requested with size %s for '%s' level %s", target_count, category_id, level_index)
            return Round(category_id, level_index, status=RoundStatus.EMPTY_TARGET)
        picked = self.select_questions(category_id, list(level.questions), target)
        questions = tuple(self.shuffle_choices(q) for q in picked)
        logger.debug(
            "Built round for '%s' level %s: %d/%d questions",
            category_id,
            level_index,
            len(questions),
            target,
        )
        return Round(category_id, level_index, questions=questions)

    def select_questions(self, category_id: str, questions: List[Question], target: int) -> List[Question]:
        correct = self.tracker.get_progress(category_id).correct_question_ids
        not_yet_correct = [q for q in questions if q.id not in correct]
        already_correct = [q for q in questions if q.id in correct]

        pool: List[Question] = []
        seen: Set[str] = set()
        for q in not_yet_correct:
            if q.id not in seen:
                pool.append(q)
                seen.add(q.id)

        if len(pool) < target:
            for q in self.rng.shuffled(already_correct):
                if len(pool) >= target:
                    break
                if q.id not in seen:
                    pool.append(q)
                    seen.add(q.id)
        elif len(pool) > target:
            pool = self.rng.shuffled(pool)[:target]

        self.rng.shuffle(pool)
        return pool

    def shuffle_choices(self, question: Question) -> RoundQuestion:
        n = len(question.choices)
        if n < 2:
            return RoundQuestion(question, tuple(range(n)), question.correct_index)
        order = tuple(self.rng.permutation(n))
        try:
            correct_slot = order.index(question.correct_index)
        except ValueError:
            correct_slot = -1
        return RoundQuestion(question, order, correct_slot)
