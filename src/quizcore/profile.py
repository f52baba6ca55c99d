from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from .persistence.models import Settings
from .persistence.store import SaveStore

logger = logging.getLogger(__name__)

DEFAULT_PLAYER_NAME = "Player"


class ProfileService:
    """Player name (login gate) and persisted settings."""

    def __init__(self, store: SaveStore) -> None:
        self.store = store

    def get_player_name(self) -> str:
        return self.store.data.player_name

    def is_logged_in(self) -> bool:
        return bool(self.store.data.player_name)

    def set_player_name(self, name: str) -> str:
        cleaned = (name or "").strip() or DEFAULT_PLAYER_NAME
        self.store.data.player_name = cleaned
        self.store.save()
        logger.info("Player name set to '%s'", cleaned)
        return cleaned

    def get_settings(self) -> Settings:
        return replace(self.store.data.settings)

    def set_settings(
        self,
        *,
        music_volume: Optional[float] = None,
        sfx_volume: Optional[float] = None,
        vibrate: Optional[bool] = None,
        language: Optional[str] = None,
    ) -> Settings:
        """Update the given fields (volumes clamped to [0, 1]) and persist."""
        current = self.store.data.settings
        updated = Settings(
            music_volume=current.music_volume if music_volume is None else music_volume,
            sfx_volume=current.sfx_volume if sfx_volume is None else sfx_volume,
            vibrate=current.vibrate if vibrate is None else bool(vibrate),
            language=current.language if not language else str(language),
        )
        self.store.data.settings = updated
        self.store.save()
        logger.info(
            "Settings saved: music=%.2f, sfx=%.2f, vibrate=%s, lang=%s",
            updated.music_volume,
            updated.sfx_volume,
            updated.vibrate,
            updated.language,
        )
        return replace(updated)
