"""Onboarding tours CLI.

Inspect the built-in tour catalog and manage per-user completion state stored
under a data directory, e.g. to re-show tours for a support case.

Commands:
 - ``list``                         tours, their pages and step counts
 - ``status --user ID``             completed tours for a user
 - ``reset --user ID [--tour ID]``  reset one tour (or all) for a user

Exit code 0 on success, 2 for an unknown tour id.

Example:
  python -m cli.tours status --user owner@example.com --data-dir ./data --json
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List

from bizops import settings
from bizops.design.builtin_tours import build_default_registry
from bizops.services.tour_completion_store import TourCompletionStore, UserIdentity
from bizops.services.tour_storage import JsonFileStorage


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Inspect and reset BizOps onboarding tours")
    p.add_argument(
        "--data-dir",
        default=settings.DATA_DIR,
        help=f"Directory holding {settings.STORAGE_FILENAME} (default: %(default)s)",
    )
    p.add_argument("--json", action="store_true", help="Emit JSON instead of human-readable text")
    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List registered tours")
    status = sub.add_parser("status", help="Show completed tours for a user")
    status.add_argument("--user", required=True, help="User id or email")
    reset = sub.add_parser("reset", help="Reset tour completion for a user")
    reset.add_argument("--user", required=True, help="User id or email")
    reset.add_argument("--tour", help="Tour id to reset (default: all tours)")
    return p.parse_args(argv)


def _tour_rows() -> List[Dict[str, Any]]:
    registry = build_default_registry()
    pages = {tour_id: page for page, tour_id in registry.page_map().items()}
    return [
        {"id": t.id, "name": t.name, "page": pages.get(t.id), "steps": len(t.steps)}
        for t in registry
    ]


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.command == "list":
        rows = _tour_rows()
        if args.json:
            print(json.dumps(rows, indent=2))
        else:
            for row in rows:
                print(f"{row['id']:<16} {row['page'] or '-':<12} {row['steps']} step(s)  {row['name']}")
        return 0

    store = TourCompletionStore(JsonFileStorage(args.data_dir))
    identity = UserIdentity(user_id=args.user)
    completed = store.load(identity)

    if args.command == "status":
        if args.json:
            print(json.dumps({"user": args.user, "completed": sorted(completed)}, indent=2))
        else:
            print(f"Completed tours for {args.user}:")
            for tour_id in sorted(completed) or ["(none)"]:
                print(f"  {tour_id}")
        return 0

    # reset
    if args.tour is not None:
        if args.tour not in build_default_registry():
            print(f"Unknown tour: {args.tour}", file=sys.stderr)
            return 2
        completed.discard(args.tour)
    else:
        completed.clear()
    store.save(identity, completed)
    if args.json:
        print(json.dumps({"user": args.user, "completed": sorted(completed)}, indent=2))
    else:
        print(f"Reset {args.tour or 'all tours'} for {args.user}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
