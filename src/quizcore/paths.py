from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from platformdirs import PlatformDirs

logger = logging.getLogger(__name__)

APP_NAME = "quizcore"

# Environment variable override (useful for tests and power users)
ENV_SAVE_DIR = "QUIZCORE_SAVE_DIR"


def default_save_dir(app_name: str = APP_NAME) -> Path:
    """Return the directory holding the save blob.

    Uses the platform user data dir unless QUIZCORE_SAVE_DIR is set.
    """
    override = os.getenv(ENV_SAVE_DIR)
    if override:
        return Path(override).expanduser().resolve()
    dirs = PlatformDirs(appname=app_name, appauthor=False)
    return Path(dirs.user_data_dir) / "saves"


def ensure_dir(path: Path, mode: Optional[int] = None) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    if mode is not None:
        try:
            os.chmod(path, mode)
        except OSError:  # Platform may not support
            logger.debug("Could not chmod directory: %s", path, exc_info=True)
    return path
