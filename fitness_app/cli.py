from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

import uvicorn

from fitness_app.core.config import load_config
from fitness_app.core.errors import FitnessAppError
from fitness_app.core.logger import setup_logging
from fitness_app.core.services import build_services
from fitness_app.core.timeutil import HOUR_SECONDS
from fitness_app.web.api import create_app


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="fitness-overlay", description="Account overlay for the fitness app (suspensions, soft-deletes, activity).")
    ap.add_argument("--config", default=None, help="Path to config JSON (default: $FITNESS_CONFIG or config/app.json).")
    sub = ap.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the admin/auth web API.")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    p = sub.add_parser("suspend", help="Suspend a user for the configured lockout window.")
    p.add_argument("user_id")
    p.add_argument("--reason", default=None)

    p = sub.add_parser("unsuspend", help="End a user's suspension.")
    p.add_argument("user_id")

    p = sub.add_parser("status", help="Show whether a user is suspended or deleted.")
    p.add_argument("user_id")

    p = sub.add_parser("delete", help="Mark one or more users deleted.")
    p.add_argument("user_ids", nargs="+")

    p = sub.add_parser("activity", help="Print a user's recent activity.")
    p.add_argument("user_id")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config)
    except FitnessAppError as e:
        print(e.user_message, file=sys.stderr)
        return 2
    logger = setup_logging(cfg.logging)
    services = build_services(cfg, logger=logger)

    try:
        if args.command == "serve":
            services.guard.restore_session()
            if services.guard.notice:
                logger.warning(services.guard.notice)
            app = create_app(services, logger=logger, session_ttl_seconds=cfg.web.session_ttl_hours * HOUR_SECONDS)
            uvicorn.run(app, host=args.host or cfg.web.bind_host, port=args.port or cfg.web.port, log_level="info")
        elif args.command == "suspend":
            services.suspensions.suspend(args.user_id, args.reason)
            print(services.suspensions.check_suspension(args.user_id).message or "Not suspended.")
        elif args.command == "unsuspend":
            services.suspensions.end_suspension(args.user_id)
            print(f"User {args.user_id} reactivated.")
        elif args.command == "status":
            check = services.suspensions.check_suspension(args.user_id)
            out = {"user_id": args.user_id, "suspended": check.is_suspended, "message": check.message, "deleted": services.deletions.is_deleted(args.user_id)}
            print(json.dumps(out, indent=2))
        elif args.command == "delete":
            added = services.deletions.mark_deleted_bulk(args.user_ids)
            print(f"Marked {len(added)} user(s) deleted.")
        elif args.command == "activity":
            for e in services.ledger.query(args.user_id):
                print(f"{e.timestamp}  {e.type:<24} {e.description}")
    except FitnessAppError as e:
        logger.error(e.user_message)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
