"""Persistence for the single save blob.

- Data models with one canonical ordered-set representation per ID list
- JSON encoding with schema versioning and legacy migration
- A key-value storage seam (in-memory and atomic file-backed)
- SaveStore: load/save/delete with corruption recovery
"""

from .codec import decode_save, encode_save, migrate_data
from .errors import SaveError, SaveValidationError
from .models import MAX_COINS, SCHEMA_VERSION, CategoryProgress, OrderedIdSet, SaveBlob, Settings
from .storage import FileStorage, InMemoryStorage, KeyValueStorage
from .store import SaveStore

__all__ = [
    "SCHEMA_VERSION",
    "MAX_COINS",
    "OrderedIdSet",
    "Settings",
    "CategoryProgress",
    "SaveBlob",
    "encode_save",
    "decode_save",
    "migrate_data",
    "KeyValueStorage",
    "InMemoryStorage",
    "FileStorage",
    "SaveStore",
    "SaveError",
    "SaveValidationError",
]
