from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..catalog import ContentCatalog, Level
from ..events import CategoryProgressChanged, CoinsChanged, EventBus, LevelUnlocked
from ..persistence.models import CategoryProgress
from ..persistence.store import SaveStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelStatus:
    """Snapshot of one level for a level-select screen."""

    index: int
    unlocked: bool
    playable: bool
    complete: bool
    remaining: int


class ProgressionTracker:
    """Per-category seen/correct tracking and level gating.

    Reads levels from the catalog and persists through the SaveStore after
    every mutation. Unknown categories or levels answer False / 0 rather than
    raising.
    """

    def __init__(self, store: SaveStore, catalog: ContentCatalog, bus: Optional[EventBus] = None) -> None:
        self.store = store
        self.catalog = catalog
        self.bus = bus

    # -----------------------
    # Progress records
    # -----------------------
    def get_progress(self, category_id: str) -> CategoryProgress:
        """Return the category's progress, creating it on first access."""
        categories = self.store.data.categories
        progress = categories.get(category_id)
        if progress is None:
            progress = CategoryProgress(category_id=category_id, unlocked_level_max=1)
            categories[category_id] = progress
            logger.debug("Created progress record for '%s'", category_id)
        elif progress.unlocked_level_max < 1:
            progress.unlocked_level_max = 1
        return progress

    def mark_seen(self, category_id: str, question_id: str, autosave: bool = True) -> None:
        self.get_progress(category_id).seen_question_ids.add(question_id)
        if autosave:
            self.store.save()

    def mark_correct(self, category_id: str, question_id: str, autosave: bool = True) -> None:
        added = self.get_progress(category_id).correct_question_ids.add(question_id)
        if autosave:
            self.store.save()
        if added:
            self._emit_progress(category_id)

    # -----------------------
    # Percent / counts
    # -----------------------
    def get_percent(self, category_id: str, total_questions: int) -> float:
        """Share of the category answered correctly at least once, in [0, 100]."""
        if total_questions <= 0:
            return 0.0
        correct = len(self.get_progress(category_id).correct_question_ids)
        return min(100.0, correct / float(total_questions) * 100.0)

    def get_category_percent(self, category_id: str) -> float:
        return self.get_percent(category_id, self.get_total_question_count(category_id))

    def get_total_question_count(self, category_id: str) -> int:
        return self.catalog.total_question_count(category_id)

    # -----------------------
    # Levels: gating & queries
    # -----------------------
    def get_unlocked_level_count(self, category_id: str) -> int:
        return self.get_progress(category_id).unlocked_level_max

    def level_has_content(self, category_id: str, level_index: int) -> bool:
        level = self.catalog.get_level(category_id, level_index)
        return level is not None and len(level.questions) > 0

    def is_level_playable(self, category_id: str, level_index: int) -> bool:
        return (
            self.level_has_content(category_id, level_index)
            and level_index <= self.get_unlocked_level_count(category_id)
        )

    def is_level_complete(self, category_id: str, level_index: int) -> bool:
        """True if every question in the level has been answered correctly at least once."""
        level = self._level(category_id, level_index)
        if level is None or not level.questions:
            return False
        correct = self.get_progress(category_id).correct_question_ids
        return all(q.id in correct for q in level.questions)

    def unlock_next_level_if_complete(self, category_id: str, level_index: int) -> bool:
        """Raise the watermark past a completed level. Returns True if newly unlocked."""
        if not self.is_level_complete(category_id, level_index):
            return False
        total_levels = self.catalog.level_count(category_id)
        progress = self.get_progress(category_id)
        desired = min(level_index + 1, total_levels)
        if desired <= progress.unlocked_level_max:
            return False
        progress.unlocked_level_max = desired
        self.store.save()
        logger.info("Unlocked level %s in '%s'", desired, category_id)
        if self.bus is not None:
            self.bus.emit(LevelUnlocked(category_id=category_id, level_index=desired))
        return True

    def get_level_remaining_count(self, category_id: str, level_index: int) -> int:
        level = self._level(category_id, level_index)
        if level is None:
            return 0
        correct = self.get_progress(category_id).correct_question_ids
        return sum(1 for q in level.questions if q.id not in correct)

    def level_statuses(self, category_id: str) -> List[LevelStatus]:
        category = self.catalog.get_category(category_id)
        if category is None:
            return []
        unlocked_max = self.get_unlocked_level_count(category_id)
        out: List[LevelStatus] = []
        for level in category.levels:
            unlocked = level.index <= unlocked_max
            out.append(
                LevelStatus(
                    index=level.index,
                    unlocked=unlocked,
                    playable=unlocked and len(level.questions) > 0,
                    complete=self.is_level_complete(category_id, level.index),
                    remaining=self.get_level_remaining_count(category_id, level.index),
                )
            )
        return out

    # -----------------------
    # Maintenance / admin
    # -----------------------
    def force_unlock_up_to(self, category_id: str, level_index: int) -> None:
        """Debug/admin override; never lowers the watermark."""
        progress = self.get_progress(category_id)
        old = progress.unlocked_level_max
        progress.unlocked_level_max = max(old, max(1, level_index))
        self.store.save()
        if progress.unlocked_level_max > old:
            logger.info("Force-unlocked '%s' up to level %s", category_id, progress.unlocked_level_max)
            if self.bus is not None:
                self.bus.emit(LevelUnlocked(category_id=category_id, level_index=progress.unlocked_level_max))

    def reset_category(self, category_id: str, keep_unlock_at_one: bool = True) -> None:
        """Clear seen/correct for one category (coins untouched)."""
        progress = self.get_progress(category_id)
        progress.seen_question_ids.clear()
        progress.correct_question_ids.clear()
        if keep_unlock_at_one:
            progress.unlocked_level_max = 1
        self.store.save()
        logger.info("Reset progress for '%s'", category_id)
        self._emit_progress(category_id)

    def reset_all_progress(self, keep_coins: bool = True) -> None:
        """Clear every category's progress. The coin balance is never touched.

        With keep_coins the preserved balance is re-announced as a CoinsChanged
        (delta 0) so coin displays refresh after the reset.
        """
        data = self.store.data
        coins = data.coins
        for progress in data.categories.values():
            progress.seen_question_ids.clear()
            progress.correct_question_ids.clear()
            progress.unlocked_level_max = 1
        self.store.save()
        logger.info("Reset all progress (%d categories, keep_coins=%s)", len(data.categories), keep_coins)
        if self.bus is not None:
            for category_id in data.categories:
                self.bus.emit(CategoryProgressChanged(category_id=category_id, percent=0.0))
            if keep_coins:
                self.bus.emit(CoinsChanged(old_amount=coins, new_amount=coins, delta=0, reason="reset"))

    # -----------------------
    # Internals
    # -----------------------
    def _level(self, category_id: str, level_index: int) -> Optional[Level]:
        return self.catalog.get_level(category_id, level_index)

    def _emit_progress(self, category_id: str) -> None:
        if self.bus is None:
            return
        self.bus.emit(
            CategoryProgressChanged(category_id=category_id, percent=self.get_category_percent(category_id))
        )
