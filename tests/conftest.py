import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from quizcore.app import GameContext  # noqa: E402
from quizcore.catalog import Category, ContentCatalog, Flat, Level, Leveled, Question  # noqa: E402
from quizcore.config import GameConfig  # noqa: E402
from quizcore.events import EventBus  # noqa: E402
from quizcore.persistence import InMemoryStorage  # noqa: E402
from quizcore.utils.random_provider import RandomProvider  # noqa: E402


def make_questions(prefix: str, count: int, choices: int = 4):
    return tuple(
        Question(
            id=f"{prefix}{i}",
            text=f"Question {prefix}{i}?",
            choices=tuple(f"{prefix}{i}-choice{c}" for c in range(choices)),
            correct_index=i % choices,
        )
        for i in range(1, count + 1)
    )


@pytest.fixture()
def catalog() -> ContentCatalog:
    general = Category(
        id="general",
        name="General Knowledge",
        source=Leveled(
            levels=(
                Level(index=2, questions=make_questions("g2-", 10)),
                Level(index=1, questions=make_questions("g1-", 10)),
                Level(index=3, questions=make_questions("g3-", 4)),
            )
        ),
    )
    legacy = Category(id="legacy", name="Legacy", source=Flat(questions=make_questions("l-", 3)))
    empty = Category(
        id="empty",
        name="Empty",
        source=Leveled(levels=(Level(index=1, questions=()),)),
    )
    return ContentCatalog([general, legacy, empty])


@pytest.fixture()
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def ctx(catalog, storage, bus) -> GameContext:
    return GameContext.create(catalog, storage, config=GameConfig(), rng=RandomProvider(seed=1234), bus=bus)


@pytest.fixture()
def recorder(bus):
    """Collects every event of the subscribed types, in emission order."""

    class Recorder:
        def __init__(self) -> None:
            self.events = []

        def listen(self, *event_types):
            for t in event_types:
                bus.subscribe(t, self.events.append)
            return self

        def of(self, event_type):
            return [e for e in self.events if isinstance(e, event_type)]

    return Recorder()
