#!/usr/bin/env python3
"""CLI for Portfolio API management tasks.

Usage:
    python -m cli <command>

Commands:
    serve      Run the API with uvicorn
    init-db    Create any missing tables
    seed       Create tables and seed the default profile, skills and projects
"""

import argparse
import asyncio

from core.config import get_settings
from core.logger import configure_logging, get_logger

logger = get_logger(__name__)


async def _init_db(seed: bool) -> None:
    from core.database import (
        create_engine,
        create_session_maker,
        dispose_engine,
        init_db,
    )
    from services.seed_service import run_seed

    engine = create_engine()
    try:
        await init_db(engine)
        if seed:
            await run_seed(create_session_maker(engine))
    finally:
        await dispose_engine(engine)


def cmd_serve(host: str | None, port: int | None, reload: bool) -> int:
    """Run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )
    return 0


def cmd_init_db() -> int:
    """Create any missing tables."""
    logger.info("cli.init_db.started")
    asyncio.run(_init_db(seed=False))
    logger.info("cli.init_db.complete")
    return 0


def cmd_seed() -> int:
    """Create tables and seed default data."""
    logger.info("cli.seed.started")
    asyncio.run(_init_db(seed=True))
    logger.info("cli.seed.complete")
    return 0


def main() -> int:
    configure_logging()

    parser = argparse.ArgumentParser(
        description="Portfolio API CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the API with uvicorn")
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")
    serve_parser.add_argument(
        "--reload", action="store_true", help="Reload on code changes"
    )
    subparsers.add_parser("init-db", help="Create any missing tables")
    subparsers.add_parser(
        "seed",
        help="Create tables and seed the default profile, skills and projects",
    )

    args = parser.parse_args()

    if args.command == "serve":
        return cmd_serve(args.host, args.port, args.reload)
    elif args.command == "init-db":
        return cmd_init_db()
    elif args.command == "seed":
        return cmd_seed()
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
