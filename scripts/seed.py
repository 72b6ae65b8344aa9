#!/usr/bin/env python
"""Load reference data (roles, admin user, permissions, badges).

Uso:
    python scripts/seed.py
    python scripts/seed.py --only 000_roles --only 002_permissions
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Ensure project root is on PYTHONPATH when running as a script.
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from marketdb.core.config import settings
from marketdb.core.logging import log_context, setup_logging
from marketdb.schema import OrderingViolation, UnknownUnitError
from marketdb.seeds import SEED_UNITS, SeedLoader

logger = logging.getLogger("seed")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Seed reference data")
    ap.add_argument(
        "--only",
        action="append",
        choices=[unit.id for unit in SEED_UNITS],
        help="Ejecuta solo esta unidad (repetible)",
    )
    return ap


async def run(only: list[str] | None = None, loader: SeedLoader | None = None) -> int:
    loader = loader or SeedLoader()
    logger.info("Seeding reference data into %s", settings.ASYNC_DATABASE_URL)
    try:
        results = await loader.seed_all(only)
    except OrderingViolation as exc:
        logger.error("Ordering violation", extra=log_context(unit_id=exc.unit_id, missing=list(exc.missing)))
        print(f"Ordering violation: {exc.detail}", file=sys.stderr)
        return 2
    except UnknownUnitError as exc:
        print(f"Error: {exc.detail}", file=sys.stderr)
        return 1

    for result in results:
        print(f"{result.unit_id}: {result.created} created, {result.skipped} skipped")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    try:
        return asyncio.run(run(args.only))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
