"""Schema lifecycle: unit registry, migration ledger and runner."""

from .exceptions import DuplicateApplication, OrderingViolation, SchemaError, UnknownUnitError
from .ledger import MigrationLedger
from .registry import SchemaRegistry, build_registry
from .runner import MigrationRunner, UnitStatus
from .unit import SchemaUnit

__all__ = [
    "DuplicateApplication",
    "MigrationLedger",
    "MigrationRunner",
    "OrderingViolation",
    "SchemaError",
    "SchemaRegistry",
    "SchemaUnit",
    "UnitStatus",
    "UnknownUnitError",
    "build_registry",
]
