"""Operator CLI for the risk engine.

Usage:
    python -m riskengine init-db
    python -m riskengine check-db
    python -m riskengine assess --input transaction.json
    python -m riskengine monitor USER_ID
"""

import argparse
import asyncio
import json
import sys

from riskengine.config import settings
from riskengine.shared.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fraud risk decision engine")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create engine tables")
    sub.add_parser("check-db", help="Check database connectivity")

    assess = sub.add_parser("assess", help="Assess one transaction given as JSON")
    assess.add_argument(
        "--input", type=str, default="-", help="Path to transaction JSON, '-' for stdin"
    )

    monitor = sub.add_parser("monitor", help="Run the real-time pattern monitor for a user")
    monitor.add_argument("user_id", type=str)

    return parser


async def _run(args: argparse.Namespace) -> int:
    from riskengine.db.database import dispose_db

    try:
        return await _dispatch(args)
    finally:
        await dispose_db()


async def _dispatch(args: argparse.Namespace) -> int:
    from riskengine.db.database import async_session_factory, check_db, init_db
    from riskengine.domains.fraud.config import FraudConfig
    from riskengine.domains.fraud.models import TransactionContext
    from riskengine.engine import FraudDecisionEngine

    if args.command == "init-db":
        await init_db()
        return 0
    if args.command == "check-db":
        ok = await check_db()
        print("ok" if ok else "unreachable")
        return 0 if ok else 1

    engine = FraudDecisionEngine.from_session_factory(
        async_session_factory, config=FraudConfig.from_env()
    )
    if args.command == "assess":
        if args.input == "-":
            raw = sys.stdin.read()
        else:
            with open(args.input) as f:
                raw = f.read()
        context = TransactionContext.model_validate_json(raw)
        result = await engine.analyze_transaction(context)
        await engine.drain()
    else:
        result = await engine.monitor_real_time_patterns(args.user_id)

    print(json.dumps(result.model_dump(mode="json"), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(settings.log_level)
    return asyncio.run(_run(args))
