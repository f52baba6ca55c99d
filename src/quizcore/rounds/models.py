from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple

from ..catalog import Question


class RoundStatus(str, Enum):
    OK = "ok"
    UNKNOWN_CATEGORY = "unknown_category"
    UNKNOWN_LEVEL = "unknown_level"
    NO_QUESTIONS = "no_questions"
    EMPTY_TARGET = "empty_target"


@dataclass(frozen=True)
class RoundQuestion:
    """A question as shown in a round, with its answers reordered.

    `choice_order[slot]` is the original choice index displayed at `slot`;
    answers are judged against `correct_slot`, never the raw correct index.
    """

    question: Question
    choice_order: Tuple[int, ...]
    correct_slot: int

    @property
    def id(self) -> str:
        return self.question.id

    @property
    def text(self) -> str:
        return self.question.text

    @property
    def labels(self) -> List[str]:
        return [self.label_at(slot) for slot in range(len(self.choice_order))]

    def label_at(self, slot: int) -> str:
        if slot < 0 or slot >= len(self.choice_order):
            return ""
        original = self.choice_order[slot]
        if original < 0 or original >= len(self.question.choices):
            return ""
        return self.question.choices[original]

    def original_index(self, slot: int) -> int:
        if slot < 0 or slot >= len(self.choice_order):
            return -1
        return self.choice_order[slot]

    def is_correct(self, slot: int) -> bool:
        return slot == self.correct_slot


@dataclass(frozen=True)
class Round:
    category_id: str
    level_index: int
    questions: Tuple[RoundQuestion, ...] = ()
    status: RoundStatus = RoundStatus.OK

    @property
    def is_empty(self) -> bool:
        """True when nothing can be played; `status` says why (never OK when empty)."""
        return not self.questions

    @property
    def question_ids(self) -> List[str]:
        return [q.id for q in self.questions]

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self) -> Iterator[RoundQuestion]:
        return iter(self.questions)


@dataclass(frozen=True)
class RoundOutcome:
    """End-of-round result for the presentation layer to render."""

    success: bool
    level_now_complete: bool
    just_unlocked: bool
    percent_after: float
    improved: bool
    correct_this_round: int = 0
    round_size: int = 0
