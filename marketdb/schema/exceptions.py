# marketdb/schema/exceptions.py
from __future__ import annotations

from collections.abc import Iterable


class SchemaError(Exception):
    """Base class for schema lifecycle errors."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class OrderingViolation(SchemaError):
    """A unit (schema or seed) references a prerequisite that is not present yet.

    Fatal: aborts the whole run and must be fixed by reordering units.
    """

    def __init__(self, unit_id: str, missing: Iterable[str], detail: str | None = None):
        self.unit_id = unit_id
        self.missing = tuple(missing)
        super().__init__(
            detail or f"Unit {unit_id!r} requires {', '.join(self.missing)} which is not present yet."
        )


class DuplicateApplication(SchemaError):
    """The effect of a unit already exists in the live database.

    Raised by inspection probes and always handled as success.
    """

    def __init__(self, kind: str, name: str, table: str | None = None):
        self.kind = kind
        self.name = name
        self.table = table
        where = f" on {table}" if table and table != name else ""
        super().__init__(f"{kind} {name!r}{where} already exists.")


class UnknownUnitError(SchemaError):
    """A unit id that is not in the registry."""
    pass
