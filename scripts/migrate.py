#!/usr/bin/env python
"""Apply, revert or inspect schema units against the configured database.

Uso:
    python scripts/migrate.py up [--target 015_create_permisos_table]
    python scripts/migrate.py down [--steps 2]
    python scripts/migrate.py status
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on PYTHONPATH when running as a script.
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from marketdb.core.config import settings
from marketdb.core.logging import log_context, setup_logging
from marketdb.db.session import make_engine
from marketdb.schema import MigrationLedger, MigrationRunner, OrderingViolation, SchemaError, build_registry

logger = logging.getLogger("migrate")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Schema lifecycle manager")
    ap.add_argument("--database-url", default=None, help="URL sync de la base (por defecto DATABASE_URL)")
    ap.add_argument("--ledger-table", default=None, help="Tabla del registro de unidades aplicadas")
    sub = ap.add_subparsers(dest="command", required=True)

    up = sub.add_parser("up", help="Aplica las unidades pendientes")
    up.add_argument("--target", default=None, help="Última unidad a aplicar (inclusive)")

    down = sub.add_parser("down", help="Revierte las últimas unidades aplicadas")
    down.add_argument("--steps", type=int, default=1)

    sub.add_parser("status", help="Lista las unidades y si están aplicadas")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    engine = make_engine(args.database_url or settings.DATABASE_URL)
    runner = MigrationRunner(engine, build_registry(), MigrationLedger(args.ledger_table))
    try:
        if args.command == "up":
            applied = runner.upgrade(target=args.target)
            print(f"Applied {len(applied)} unit(s)")
            for unit_id in applied:
                print(f"  + {unit_id}")
        elif args.command == "down":
            reverted = runner.downgrade(steps=args.steps)
            print(f"Reverted {len(reverted)} unit(s)")
            for unit_id in reverted:
                print(f"  - {unit_id}")
        else:
            for status in runner.status():
                mark = "x" if status.applied else " "
                print(f"[{mark}] {status.id}  {status.description}")
    except OrderingViolation as exc:
        logger.error("Ordering violation", extra=log_context(unit_id=exc.unit_id, missing=list(exc.missing)))
        print(f"Ordering violation: {exc.detail}", file=sys.stderr)
        return 2
    except (SchemaError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
