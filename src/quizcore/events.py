"""Synchronous in-process notifications for the presentation layer.

Subscribers are keyed by event class; events are emitted by instance. Delivery
is fire-and-forget: a failing subscriber is logged and never reaches the
emitting core operation.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Type, TypeVar

if TYPE_CHECKING:  # pragma: no cover
    from .rounds.models import RoundOutcome

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EventBus:
    """Simple class-keyed publish/subscribe bus."""

    def __init__(self) -> None:
        self._subscribers: Dict[Type[Any], List[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        if not callable(handler):
            raise TypeError("handler must be callable")
        self._subscribers.setdefault(event_type, []).append(handler)  # type: ignore[arg-type]
        logger.debug("Subscribed %s to %s", getattr(handler, "__name__", handler), event_type.__name__)

    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            if not handlers:
                self._subscribers.pop(event_type, None)

    def emit(self, event: Any) -> None:
        for event_type, handlers in list(self._subscribers.items()):
            if not isinstance(event, event_type):
                continue
            for h in list(handlers):
                try:
                    h(event)
                except Exception:
                    logger.exception("Error in subscriber for %s", type(event).__name__)


@dataclass(frozen=True)
class CoinsChanged:
    old_amount: int
    new_amount: int
    delta: int
    reason: str  # e.g., "add", "spend", "set", "signup_bonus", "reset"


@dataclass(frozen=True)
class LevelUnlocked:
    category_id: str
    level_index: int


@dataclass(frozen=True)
class CategoryProgressChanged:
    category_id: str
    percent: float


@dataclass(frozen=True)
class RoundCompleted:
    category_id: str
    level_index: int
    outcome: "RoundOutcome"
