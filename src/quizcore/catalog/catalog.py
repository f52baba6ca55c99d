from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from .models import Category, Level

logger = logging.getLogger(__name__)


class ContentCatalog:
    """Read-only registry of categories -> levels -> questions.

    Built once per process (usually by `load_catalog_dir`) and shared by
    reference with the tracker and round builder.
    """

    def __init__(self, categories: Iterable[Category] = ()) -> None:
        self._categories: Dict[str, Category] = {}
        for cat in categories:
            if cat.id in self._categories:
                logger.warning("Duplicate category id '%s'; later definition wins", cat.id)
            self._categories[cat.id] = cat
        logger.debug("ContentCatalog built with %d categories", len(self._categories))

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._categories

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories.values())

    def __len__(self) -> int:
        return len(self._categories)

    def category_ids(self) -> List[str]:
        return list(self._categories.keys())

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def get_level(self, category_id: str, level_index: int) -> Optional[Level]:
        cat = self._categories.get(category_id)
        if cat is None:
            return None
        return cat.get_level(level_index)

    def level_count(self, category_id: str) -> int:
        cat = self._categories.get(category_id)
        return cat.level_count if cat else 0

    def total_question_count(self, category_id: str) -> int:
        cat = self._categories.get(category_id)
        return cat.total_questions if cat else 0
