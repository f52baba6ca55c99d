from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Question:
    """One multiple-choice question. `id` is unique within its category."""

    id: str
    text: str
    choices: Tuple[str, ...]
    correct_index: int
    difficulty: int = 0

    @property
    def correct_choice(self) -> str:
        if 0 <= self.correct_index < len(self.choices):
            return self.choices[self.correct_index]
        return ""

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Question":
        return Question(
            id=str(data["id"]),
            text=str(data.get("text", "")),
            choices=tuple(str(c) for c in data.get("choices", [])),
            correct_index=int(data.get("correctIndex", 0)),
            difficulty=int(data.get("difficulty", 0)),
        )


@dataclass(frozen=True)
class Level:
    index: int
    questions: Tuple[Question, ...] = ()

    @property
    def question_ids(self) -> List[str]:
        return [q.id for q in self.questions]

    def __len__(self) -> int:
        return len(self.questions)


@dataclass(frozen=True)
class Leveled:
    """Current bank format: explicit `levels` blocks."""

    levels: Tuple[Level, ...]


@dataclass(frozen=True)
class Flat:
    """Legacy bank format: one flat `questions` list, treated as level 1."""

    questions: Tuple[Question, ...]


LevelSource = Union[Leveled, Flat]


def normalize_levels(source: LevelSource) -> Tuple[Level, ...]:
    """Resolve a LevelSource into the ordered level tuple the core consumes."""
    if isinstance(source, Flat):
        if not source.questions:
            return ()
        return (Level(index=1, questions=source.questions),)
    return tuple(sorted(source.levels, key=lambda lvl: lvl.index))


@dataclass(frozen=True)
class Category:
    """A themed question set, normalized to explicit levels at construction."""

    id: str
    name: str
    source: LevelSource
    questions_per_round: Optional[int] = None
    levels: Tuple[Level, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "levels", normalize_levels(self.source))

    @property
    def is_legacy(self) -> bool:
        return isinstance(self.source, Flat)

    @property
    def level_count(self) -> int:
        return len(self.levels)

    @property
    def total_questions(self) -> int:
        return sum(len(lvl.questions) for lvl in self.levels)

    def get_level(self, level_index: int) -> Optional[Level]:
        for lvl in self.levels:
            if lvl.index == level_index:
                return lvl
        return None
