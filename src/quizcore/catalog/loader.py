from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from jsonschema import Draft202012Validator

from ..errors import CatalogError, CatalogValidationError
from .catalog import ContentCatalog
from .models import Category, Flat, Level, Leveled, LevelSource, Question

logger = logging.getLogger(__name__)

SCHEMA_NAME = "question_bank.schema.json"


@lru_cache(maxsize=1)
def _load_bank_schema() -> Dict[str, Any]:
    """Load the bundled question bank schema (static, so cached)."""
    ref = resources.files("quizcore.catalog").joinpath("schemas").joinpath(SCHEMA_NAME)
    with ref.open("r", encoding="utf-8") as fh:
        logger.debug("Loading question bank schema from package resources")
        return json.load(fh)


def _validator() -> Draft202012Validator:
    return Draft202012Validator(_load_bank_schema())


def validate_bank_dict(data: Any, source: str = "<memory>") -> None:
    """Validate a raw question bank against the schema and semantic rules.

    Raises:
        CatalogValidationError listing every problem found.
    """
    errors = sorted(_validator().iter_errors(data), key=lambda e: [str(p) for p in e.path])
    details: List[str] = []
    for err in errors:
        path = "/".join(str(p) for p in err.path) or "<root>"
        details.append(f"at {path}: {err.message}")
    if not details:
        details.extend(_semantic_problems(data))
    if details:
        for d in details:
            logger.error("Question bank %s invalid %s", source, d)
        raise CatalogValidationError(f"Question bank validation failed for {source}", details)


def _semantic_problems(data: Dict[str, Any]) -> List[str]:
    problems: List[str] = []
    seen_ids: set[str] = set()
    seen_levels: set[int] = set()

    blocks: List[tuple[str, List[Dict[str, Any]]]] = []
    levels = data.get("levels") or []
    if levels:
        for i, lvl in enumerate(levels):
            idx = lvl["levelIndex"]
            if idx in seen_levels:
                problems.append(f"at levels/{i}: duplicate levelIndex {idx}")
            seen_levels.add(idx)
            blocks.append((f"levels/{i}/questions", lvl["questions"]))
    else:
        blocks.append(("questions", data.get("questions") or []))

    for prefix, questions in blocks:
        for j, q in enumerate(questions):
            if q["correctIndex"] >= len(q["choices"]):
                problems.append(
                    f"at {prefix}/{j}: correctIndex {q['correctIndex']} out of range "
                    f"for {len(q['choices'])} choices"
                )
            if q["id"] in seen_ids:
                problems.append(f"at {prefix}/{j}: duplicate question id '{q['id']}'")
            seen_ids.add(q["id"])
    return problems


def parse_bank(data: Dict[str, Any], source: str = "<memory>") -> Category:
    """Validate a raw bank dict and build a normalized Category."""
    validate_bank_dict(data, source)

    levels_raw = data.get("levels") or []
    src: LevelSource
    if levels_raw:
        src = Leveled(
            levels=tuple(
                Level(
                    index=int(lvl["levelIndex"]),
                    questions=tuple(Question.from_dict(q) for q in lvl["questions"]),
                )
                for lvl in levels_raw
            )
        )
    else:
        # Legacy flat list; resolved to a synthetic level 1 by Category
        src = Flat(questions=tuple(Question.from_dict(q) for q in data.get("questions") or []))

    per_round = data.get("questionsPerRound")
    return Category(
        id=data["categoryId"],
        name=data.get("categoryName") or data["categoryId"],
        source=src,
        questions_per_round=int(per_round) if per_round else None,
    )


def load_bank_file(path: Union[str, os.PathLike]) -> Category:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise CatalogError(f"Question bank not found: {p}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Failed to parse {p} (line {e.lineno}, column {e.colno}): {e.msg}") from e
    return parse_bank(data, source=str(p))


def catalog_from_dicts(banks: Iterable[Dict[str, Any]]) -> ContentCatalog:
    """Build a catalog from already-parsed bank dicts; invalid banks raise."""
    return ContentCatalog(parse_bank(b) for b in banks)


def load_catalog_dir(directory: Union[str, os.PathLike], *, strict: bool = False) -> ContentCatalog:
    """Load every `*.json` question bank in a directory.

    Invalid banks are logged and skipped unless `strict` is set.
    """
    root = Path(directory)
    if not root.is_dir():
        raise CatalogError(f"Question bank directory not found: {root}")

    categories: List[Category] = []
    for path in sorted(root.glob("*.json")):
        try:
            categories.append(load_bank_file(path))
        except CatalogError:
            if strict:
                raise
            logger.warning("Skipping invalid question bank %s", path)
    catalog = ContentCatalog(categories)
    logger.info("Loaded %d categories from %s", len(catalog), root)
    return catalog
