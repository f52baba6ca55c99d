from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class RandomProvider:
    """
    Thin wrapper around random.Random to make shuffling deterministic and
    injectable for tests while avoiding global state.
    """

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def shuffle(self, items: MutableSequence[T]) -> None:
        """In-place Fisher-Yates shuffle."""
        for i in range(len(items) - 1, 0, -1):
            j = self._rng.randint(0, i)
            items[i], items[j] = items[j], items[i]

    def shuffled(self, items: Sequence[T]) -> List[T]:
        out = list(items)
        self.shuffle(out)
        return out

    def permutation(self, n: int) -> List[int]:
        return self.shuffled(range(max(0, n)))
