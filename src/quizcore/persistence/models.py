from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List

from .errors import SaveValidationError

# Increment when making breaking schema changes. Version 1 is the
# versionless layout with list-shaped categories.
SCHEMA_VERSION = 2

MAX_COINS = 2**31 - 1


def _clamp(val: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, float(val)))


class OrderedIdSet:
    """Insertion-ordered set of question IDs that serializes straight to a list."""

    __slots__ = ("_items",)

    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._items: Dict[str, None] = dict.fromkeys(str(i) for i in ids)

    def add(self, question_id: str) -> bool:
        """Add an ID; returns True if it was not present before."""
        if question_id in self._items:
            return False
        self._items[question_id] = None
        return True

    def clear(self) -> None:
        self._items.clear()

    def to_list(self) -> List[str]:
        return list(self._items)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedIdSet):
            return set(self._items) == set(other._items)
        if isinstance(other, (set, frozenset)):
            return set(self._items) == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"OrderedIdSet({self.to_list()!r})"


def _id_list(data: Dict[str, Any], key: str) -> List[str]:
    raw = data.get(key) or []
    if not isinstance(raw, list):
        raise SaveValidationError(f"{key} must be a list")
    return [str(x) for x in raw]


@dataclass
class Settings:
    music_volume: float = 0.8  # 0..1
    sfx_volume: float = 0.8    # 0..1
    vibrate: bool = True
    language: str = "English"

    def __post_init__(self) -> None:
        self.music_volume = _clamp(self.music_volume, 0.0, 1.0)
        self.sfx_volume = _clamp(self.sfx_volume, 0.0, 1.0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "musicVolume": self.music_volume,
            "sfxVolume": self.sfx_volume,
            "vibrate": self.vibrate,
            "language": self.language,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Settings":
        if not isinstance(data, dict):
            return Settings()
        defaults = Settings()
        return Settings(
            music_volume=float(data.get("musicVolume", defaults.music_volume)),
            sfx_volume=float(data.get("sfxVolume", defaults.sfx_volume)),
            vibrate=bool(data.get("vibrate", defaults.vibrate)),
            language=str(data.get("language") or defaults.language),
        )


@dataclass
class CategoryProgress:
    """Per-category seen/correct sets and the unlocked-level watermark."""

    category_id: str
    seen_question_ids: OrderedIdSet = field(default_factory=OrderedIdSet)
    correct_question_ids: OrderedIdSet = field(default_factory=OrderedIdSet)
    unlocked_level_max: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.category_id, str) or not self.category_id:
            raise SaveValidationError("CategoryProgress.category_id must be a non-empty string")
        if self.unlocked_level_max < 1:
            self.unlocked_level_max = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categoryId": self.category_id,
            "seenQuestionIds": self.seen_question_ids.to_list(),
            "correctQuestionIds": self.correct_question_ids.to_list(),
            "unlockedLevelMax": self.unlocked_level_max,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "CategoryProgress":
        if not isinstance(data, dict):
            raise SaveValidationError("CategoryProgress entry must be an object")
        try:
            unlocked = int(data.get("unlockedLevelMax", 1))
        except (TypeError, ValueError, OverflowError) as e:
            raise SaveValidationError("unlockedLevelMax must be an integer") from e
        return CategoryProgress(
            category_id=data.get("categoryId", ""),
            seen_question_ids=OrderedIdSet(_id_list(data, "seenQuestionIds")),
            correct_question_ids=OrderedIdSet(_id_list(data, "correctQuestionIds")),
            unlocked_level_max=unlocked,
        )


@dataclass
class SaveBlob:
    """Root persisted entity: coins, profile, settings and category progress."""

    coins: int = 0
    player_name: str = ""
    signup_bonus_claimed: bool = False
    settings: Settings = field(default_factory=Settings)
    categories: Dict[str, CategoryProgress] = field(default_factory=dict)
    schema_version: int = SCHEMA_VERSION

    def __post_init__(self) -> None:
        self.coins = int(max(0, min(MAX_COINS, self.coins)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "coins": self.coins,
            "playerName": self.player_name,
            "signupBonusClaimed": self.signup_bonus_claimed,
            "settings": self.settings.to_dict(),
            "categories": {cid: p.to_dict() for cid, p in self.categories.items()},
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "SaveBlob":
        if not isinstance(data, dict):
            raise SaveValidationError("Save blob must be a JSON object")
        raw_categories = data.get("categories") or {}
        if not isinstance(raw_categories, dict):
            raise SaveValidationError("categories must be an object keyed by category id")

        categories: Dict[str, CategoryProgress] = {}
        for cid, entry in raw_categories.items():
            if isinstance(entry, dict) and not entry.get("categoryId"):
                entry = {**entry, "categoryId": cid}
            progress = CategoryProgress.from_dict(entry)
            categories[progress.category_id] = progress

        try:
            coins = int(data.get("coins", 0))
        except (TypeError, ValueError, OverflowError) as e:
            raise SaveValidationError("coins must be an integer") from e

        return SaveBlob(
            coins=coins,
            player_name=str(data.get("playerName") or ""),
            signup_bonus_claimed=bool(data.get("signupBonusClaimed", False)),
            settings=Settings.from_dict(data.get("settings") or {}),
            categories=categories,
            schema_version=int(data.get("schema_version", SCHEMA_VERSION)),
        )
