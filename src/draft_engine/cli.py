# Area: Shared
"""
draft_engine.cli — Command-line interface
=========================================

Usage:
    python -m draft_engine init-db
    python -m draft_engine process-due                  # all drafts
    python -m draft_engine process-due --draft-id 7
    python -m draft_engine snapshot --draft-id 7

Configuration comes from --config (JSON), a .env file and DRAFT_*
environment variables; see draft_engine.config.
"""

import argparse
import json
import sys
from typing import List, Optional

from ._shared.logging_config import log_store_failure, setup_logging
from .config import load_config
from .engine import DraftEngine
from .errors import StoreFailure


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="draft-engine",
        description="Snake draft engine - automation and maintenance commands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m draft_engine init-db
  python -m draft_engine process-due
  DRAFT_DB_PATH=drafts.db python -m draft_engine process-due --draft-id 3
        """,
    )
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument("--env-file", type=str, help="Path to .env file")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("init-db", help="Create the database schema")

    process = sub.add_parser("process-due", help="Start due drafts and resolve lapsed deadlines")
    process.add_argument("--draft-id", type=int, help="Only process this draft")

    snapshot = sub.add_parser("snapshot", help="Print a draft's current state as JSON")
    snapshot.add_argument("--draft-id", type=int, required=True)

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    try:
        config = load_config(args.config, args.env_file)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    setup_logging(log_file_path=config.log_file, level=config.log_level)
    engine = DraftEngine(config)

    try:
        if args.command == "init-db":
            engine.initialize()
            print(json.dumps({"ok": True, "db_path": config.db_path}))
        elif args.command == "process-due":
            result = engine.process_due_drafts(args.draft_id)
            payload = {"ok": not result.failed_draft_ids, **result.model_dump()}
            payload["server_now"] = engine.clock.now().isoformat()
            print(json.dumps(payload))
            if result.failed_draft_ids:
                return 1
        elif args.command == "snapshot":
            snapshot = engine.get_draft_snapshot(args.draft_id)
            if snapshot is None:
                print(f"Error: Draft {args.draft_id} not found.", file=sys.stderr)
                return 1
            print(snapshot.model_dump_json(indent=2))
    except StoreFailure as e:
        log_store_failure(e)
        return 1
    return 0
