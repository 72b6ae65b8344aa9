# marketdb/schema/registry.py
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy.engine import Connection

from marketdb.schema.exceptions import OrderingViolation, UnknownUnitError
from marketdb.schema.ops import has_table
from marketdb.schema.unit import SchemaUnit

logger = logging.getLogger(__name__)


def _operations(connection: Connection) -> Operations:
    return Operations(MigrationContext.configure(connection))


class SchemaRegistry:
    """Statically ordered list of schema units.

    The list is validated once at construction: unique ids, strictly ascending
    sequence numbers, and every required table created by an earlier unit.
    """

    def __init__(self, units: Iterable[SchemaUnit]):
        self._units: tuple[SchemaUnit, ...] = tuple(units)
        self._by_id: dict[str, SchemaUnit] = {}
        self._validate()

    def _validate(self) -> None:
        created: set[str] = set()
        previous: SchemaUnit | None = None
        for unit in self._units:
            if unit.id in self._by_id:
                raise OrderingViolation(unit.id, (unit.id,), f"Duplicate unit id {unit.id!r}.")
            if previous is not None and unit.sequence <= previous.sequence:
                raise OrderingViolation(
                    unit.id,
                    (previous.id,),
                    f"Unit {unit.id!r} is not ordered after {previous.id!r}.",
                )
            missing = [table for table in unit.requires if table not in created]
            if missing:
                raise OrderingViolation(unit.id, missing)
            created.update(unit.creates)
            self._by_id[unit.id] = unit
            previous = unit

    def __iter__(self) -> Iterator[SchemaUnit]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)

    @property
    def units(self) -> tuple[SchemaUnit, ...]:
        return self._units

    @property
    def ids(self) -> list[str]:
        return [unit.id for unit in self._units]

    def get(self, unit_id: str) -> SchemaUnit:
        try:
            return self._by_id[unit_id]
        except KeyError:
            raise UnknownUnitError(f"Unknown schema unit {unit_id!r}.") from None

    def pending(self, applied: Iterable[str], target: str | None = None) -> list[SchemaUnit]:
        """Units not yet applied, ascending, up to and including ``target``."""
        done = set(applied)
        upper = self.get(target).sequence if target else None
        return [
            unit
            for unit in self._units
            if unit.id not in done and (upper is None or unit.sequence <= upper)
        ]

    def applied_in_reverse(self, applied: Iterable[str]) -> list[SchemaUnit]:
        done = set(applied)
        return [unit for unit in reversed(self._units) if unit.id in done]

    def check_prerequisites(self, unit: SchemaUnit, connection: Connection) -> None:
        missing = [table for table in unit.requires if not has_table(connection, table)]
        if missing:
            raise OrderingViolation(unit.id, missing)

    def apply(self, unit: SchemaUnit, connection: Connection) -> None:
        """Run exactly one forward mutation on ``connection``.

        Prerequisites are checked before anything is emitted, so an ordering
        error never leaves a partial mutation behind.
        """
        self.check_prerequisites(unit, connection)
        unit.upgrade(_operations(connection))

    def revert(self, unit: SchemaUnit, connection: Connection) -> None:
        unit.downgrade(_operations(connection))


def build_registry(units: Sequence[SchemaUnit] | None = None) -> SchemaRegistry:
    """Registry over the canonical unit list (or an explicit one, for tests)."""
    if units is None:
        from marketdb.schema.units import UNITS

        units = UNITS
    return SchemaRegistry(units)
