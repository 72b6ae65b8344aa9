# marketdb/seeds/loader.py
"""Idempotent reference-data loader.

Seed units run on an ``AsyncSession`` in a fixed order. Each unit looks up its
rows by natural key and inserts only what is missing, so re-running the loader
is a no-op. Every unit commits on its own; a failure rolls that unit back and
propagates.
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from marketdb.core.logging import log_context
from marketdb.db.session_async import AsyncSessionLocal, run_in_transaction
from marketdb.schema.exceptions import UnknownUnitError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SeedResult:
    unit_id: str
    created: int = 0
    skipped: int = 0


@dataclass(frozen=True, slots=True)
class SeedUnit:
    id: str
    description: str
    run: Callable[[AsyncSession], Awaitable[SeedResult]]


class SeedLoader:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        units: Sequence[SeedUnit] | None = None,
    ):
        if units is None:
            from marketdb.seeds import SEED_UNITS

            units = SEED_UNITS
        self.session_factory = session_factory or AsyncSessionLocal
        self.units: tuple[SeedUnit, ...] = tuple(units)

    def get(self, unit_id: str) -> SeedUnit:
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        raise UnknownUnitError(f"Unknown seed unit {unit_id!r}.")

    async def seed(self, unit: SeedUnit | str) -> SeedResult:
        if isinstance(unit, str):
            unit = self.get(unit)

        logger.info("seed.apply.start", extra=log_context(unit_id=unit.id))
        try:
            result = await run_in_transaction(unit.run, self.session_factory)
        except Exception:
            logger.error("seed.apply.failed", extra=log_context(unit_id=unit.id), exc_info=True)
            raise

        logger.info(
            "seed.apply.done",
            extra=log_context(unit_id=unit.id, created=result.created, skipped=result.skipped),
        )
        return result

    async def seed_all(self, only: Iterable[str] | None = None) -> list[SeedResult]:
        """Run every unit in order, or only the named ones (still in canonical order)."""
        wanted = set(only) if only else None
        if wanted:
            for unit_id in wanted:
                self.get(unit_id)

        results: list[SeedResult] = []
        for unit in self.units:
            if wanted is not None and unit.id not in wanted:
                continue
            results.append(await self.seed(unit))

        logger.info(
            "Seed completed: %s created, %s skipped",
            sum(r.created for r in results),
            sum(r.skipped for r in results),
        )
        return results
