from __future__ import annotations

import json
import logging
from typing import Any, Dict

from .errors import SaveValidationError
from .models import SCHEMA_VERSION, SaveBlob

logger = logging.getLogger(__name__)

# Blobs written before versioning carry no schema_version key.
LEGACY_VERSION = 1


def encode_save(blob: SaveBlob) -> str:
    """Encode a SaveBlob to a compact, stable JSON string."""
    return json.dumps(blob.to_dict(), ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def decode_save(text: str) -> SaveBlob:
    """Decode JSON text into a SaveBlob, migrating legacy layouts."""
    if not text or not text.strip():
        raise SaveValidationError("Empty save blob")
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise SaveValidationError(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise SaveValidationError("Save blob is nested too deeply") from e
    if not isinstance(data, dict):
        raise SaveValidationError("Save blob must be a JSON object")

    try:
        version = int(data.get("schema_version", LEGACY_VERSION))
    except (TypeError, ValueError, OverflowError) as e:
        raise SaveValidationError("schema_version must be an integer") from e
    if version != SCHEMA_VERSION:
        data = migrate_data(data, from_version=version, to_version=SCHEMA_VERSION)

    try:
        return SaveBlob.from_dict(data)
    except (TypeError, ValueError, AttributeError, OverflowError, RecursionError) as e:
        raise SaveValidationError(f"Malformed save blob: {e}") from e


def migrate_data(data: Dict[str, Any], from_version: int, to_version: int) -> Dict[str, Any]:
    """Migrate data between schema versions stepwise."""
    if from_version == to_version:
        return data

    if from_version > to_version:
        raise SaveValidationError(
            f"Save schema version {from_version} is newer than supported {to_version}."
        )
    if from_version < LEGACY_VERSION:
        raise SaveValidationError(f"Unknown save schema version {from_version}.")

    for v in range(from_version, to_version):
        if v == 1:
            data = migrate_v1_to_v2(data)
    data["schema_version"] = to_version
    return data


def migrate_v1_to_v2(data: Dict[str, Any]) -> Dict[str, Any]:
    """Versionless layout -> v2.

    v1 stored categories as a list of ``{categoryId, correctList, seenList,
    unlockedLevelMax}`` and predates the profile fields, which default to
    their zero-values.
    """
    out = dict(data)
    raw = data.get("categories") or []
    if isinstance(raw, list):
        categories: Dict[str, Any] = {}
        for entry in raw:
            if not isinstance(entry, dict) or not entry.get("categoryId"):
                logger.debug("Dropping legacy category entry without id: %r", entry)
                continue
            cid = str(entry["categoryId"])
            categories[cid] = {
                "categoryId": cid,
                "seenQuestionIds": entry.get("seenList", entry.get("seenQuestionIds")) or [],
                "correctQuestionIds": entry.get("correctList", entry.get("correctQuestionIds")) or [],
                "unlockedLevelMax": entry.get("unlockedLevelMax", 1),
            }
        out["categories"] = categories
    out.setdefault("playerName", "")
    out.setdefault("signupBonusClaimed", False)
    out.setdefault("settings", {})
    logger.info("Migrated legacy save blob (%d categories)", len(out.get("categories") or {}))
    return out
