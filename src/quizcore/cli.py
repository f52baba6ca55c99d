"""Admin/debug tool for a local save.

Examples:
    quizcore --catalog banks/ show
    quizcore --catalog banks/ reset-category general
    quizcore --catalog banks/ force-unlock general 5
    quizcore --catalog banks/ delete-all
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .app import GameContext
from .errors import QuizError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="quizcore", description="Inspect and maintain quiz progress")
    p.add_argument("--catalog", required=True, help="Directory containing question bank JSON files")
    p.add_argument("--save-dir", default=None, help="Directory holding the save (default: platform data dir)")
    p.add_argument("--config", default=None, help="Optional game config JSON")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")

    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="Print coins and per-category progress as JSON")

    rc = sub.add_parser("reset-category", help="Clear progress for one category")
    rc.add_argument("category")
    rc.add_argument("--keep-unlocks", action="store_true", help="Do not reset the unlocked level")

    sub.add_parser("reset-all", help="Clear progress for every category (coins are kept)")

    sub.add_parser("delete-all", help="Delete ALL save data")

    fu = sub.add_parser("force-unlock", help="Unlock levels up to LEVEL")
    fu.add_argument("category")
    fu.add_argument("level", type=int)

    ac = sub.add_parser("add-coins", help="Add (or remove, if negative) coins")
    ac.add_argument("amount", type=int)
    return p


def summarize(ctx: GameContext) -> Dict[str, Any]:
    categories: Dict[str, Any] = {}
    for category in ctx.catalog:
        cid = category.id
        categories[cid] = {
            "name": category.name,
            "percent": round(ctx.tracker.get_category_percent(cid), 2),
            "unlocked_level_max": ctx.tracker.get_unlocked_level_count(cid),
            "levels": [
                {"index": s.index, "complete": s.complete, "remaining": s.remaining, "playable": s.playable}
                for s in ctx.tracker.level_statuses(cid)
            ],
        }
    return {
        "coins": ctx.ledger.get_coins(),
        "player_name": ctx.profile.get_player_name(),
        "categories": categories,
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.WARNING)

    try:
        ctx = GameContext.from_paths(args.catalog, save_dir=args.save_dir, config_path=args.config)
    except QuizError as e:
        logger.error("%s", e)
        return 2

    if args.command == "reset-category":
        ctx.tracker.reset_category(args.category, keep_unlock_at_one=not args.keep_unlocks)
        logger.info("Reset progress for '%s'", args.category)
    elif args.command == "reset-all":
        ctx.tracker.reset_all_progress()
    elif args.command == "delete-all":
        ctx.store.delete_all()
    elif args.command == "force-unlock":
        ctx.tracker.force_unlock_up_to(args.category, args.level)
    elif args.command == "add-coins":
        ctx.ledger.add_coins(args.amount, reason="admin")

    # Print JSON summary so it can be diffed across runs
    print(json.dumps(summarize(ctx), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
