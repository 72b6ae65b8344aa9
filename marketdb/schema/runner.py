# marketdb/schema/runner.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.engine import Engine

from marketdb.core.logging import log_context
from marketdb.schema.ledger import MigrationLedger
from marketdb.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UnitStatus:
    id: str
    description: str
    applied: bool


class MigrationRunner:
    """Single-writer, sequential runner over a registry and an injected ledger.

    Each unit runs in its own transaction together with its ledger record. A
    failure rolls back that unit and propagates; units committed earlier stay
    recorded, so re-invoking the runner resumes where it stopped.
    """

    def __init__(self, engine: Engine, registry: SchemaRegistry, ledger: MigrationLedger | None = None):
        self.engine = engine
        self.registry = registry
        self.ledger = ledger or MigrationLedger()

    def _applied(self) -> set[str]:
        with self.engine.begin() as conn:
            self.ledger.ensure(conn)
            return self.ledger.get_applied(conn)

    def upgrade(self, target: str | None = None) -> list[str]:
        applied = self._applied()
        for unit in self.registry:
            if unit.id in applied:
                logger.debug("unit.skip", extra=log_context(unit_id=unit.id))

        pending = self.registry.pending(applied, target)
        if not pending:
            logger.info("Schema up to date", extra=log_context(applied=len(applied)))
            return []

        done: list[str] = []
        for unit in pending:
            logger.info("unit.apply.start", extra=log_context(unit_id=unit.id))
            try:
                with self.engine.begin() as conn:
                    self.registry.apply(unit, conn)
                    self.ledger.record(conn, unit.id)
            except Exception:
                logger.error("unit.apply.failed", extra=log_context(unit_id=unit.id, completed=done), exc_info=True)
                raise
            done.append(unit.id)
            logger.info("unit.apply.done", extra=log_context(unit_id=unit.id))

        logger.info("Upgrade completed: %s unit(s) applied", len(done))
        return done

    def downgrade(self, steps: int = 1) -> list[str]:
        if steps < 1:
            raise ValueError("steps must be >= 1")

        applied = self._applied()
        reverted: list[str] = []
        for unit in self.registry.applied_in_reverse(applied)[:steps]:
            logger.info("unit.revert.start", extra=log_context(unit_id=unit.id))
            with self.engine.begin() as conn:
                self.registry.revert(unit, conn)
                self.ledger.forget(conn, unit.id)
            reverted.append(unit.id)
            logger.info("unit.revert.done", extra=log_context(unit_id=unit.id))
        return reverted

    def status(self) -> list[UnitStatus]:
        applied = self._applied()
        return [UnitStatus(unit.id, unit.description, unit.id in applied) for unit in self.registry]
