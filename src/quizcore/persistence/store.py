from __future__ import annotations

import logging
from typing import Optional

from ..config import DEFAULT_STORAGE_KEY
from ..events import CoinsChanged, EventBus
from .codec import decode_save, encode_save
from .errors import SaveError
from .models import SaveBlob
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

CORRUPT_SUFFIX = ".corrupt"


class SaveStore:
    """Owns the single persisted SaveBlob.

    Every mutating operation elsewhere in the core calls `save()` right after
    changing `data`; the whole blob is rewritten each time.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_STORAGE_KEY,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.storage = storage
        self.key = key
        self.bus = bus
        self._data: Optional[SaveBlob] = None

    @property
    def data(self) -> SaveBlob:
        if self._data is None:
            self.load()
        assert self._data is not None
        return self._data

    def exists(self) -> bool:
        return self.storage.has(self.key)

    def load(self) -> SaveBlob:
        """Load the blob, creating (and persisting) a fresh default when absent or corrupt."""
        try:
            raw = self.storage.get(self.key) if self.storage.has(self.key) else None
        except (ValueError, OSError) as e:
            # Undecodable bytes or an unreadable file; nothing usable to back up
            logger.warning("Save under '%s' could not be read (%s); starting fresh", self.key, e)
            return self._start_fresh()
        if raw is None:
            logger.info("No save under '%s'; creating fresh save", self.key)
            return self._start_fresh()

        try:
            self._data = decode_save(raw)
        except SaveError as e:
            logger.warning("Save under '%s' is unreadable (%s); starting fresh", self.key, e)
            self.storage.set(self.key + CORRUPT_SUFFIX, raw)
            return self._start_fresh()

        logger.info(
            "Loaded save '%s': coins=%d categories=%d",
            self.key,
            self._data.coins,
            len(self._data.categories),
        )
        return self._data

    def _start_fresh(self) -> SaveBlob:
        self._data = SaveBlob()
        self.save()
        return self._data

    def save(self, blob: Optional[SaveBlob] = None) -> None:
        if blob is not None:
            self._data = blob
        if self._data is None:
            self._data = SaveBlob()
        self.storage.set(self.key, encode_save(self._data))
        logger.debug("Saved '%s'", self.key)

    def delete_all(self) -> None:
        """Wipe the persisted blob and start over with defaults. Use carefully."""
        old_coins = self._data.coins if self._data is not None else 0
        self.storage.delete(self.key)
        self._data = SaveBlob()
        self.save()
        logger.info("Deleted all save data under '%s'", self.key)
        if self.bus is not None:
            self.bus.emit(
                CoinsChanged(old_amount=old_coins, new_amount=0, delta=-old_coins, reason="delete_all")
            )
