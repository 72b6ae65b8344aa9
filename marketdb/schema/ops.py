# marketdb/schema/ops.py
"""Idempotent-by-inspection DDL helpers used by every schema unit.

Each helper probes the live schema before mutating it. An effect that is
already present raises DuplicateApplication internally, which is logged and
treated as success; engine errors are never trapped for this.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

import sqlalchemy as sa
from alembic.operations import Operations
from sqlalchemy.engine import Connection

from marketdb.core.logging import log_context
from marketdb.schema.exceptions import DuplicateApplication

logger = logging.getLogger(__name__)


def _insp(bind: Connection) -> sa.Inspector:
    return sa.inspect(bind)


def has_table(bind: Connection, name: str) -> bool:
    """True when the table exists."""
    return _insp(bind).has_table(name)


def index_exists(bind: Connection, table: str, name: str) -> bool:
    return any(ix["name"] == name for ix in _insp(bind).get_indexes(table))


def unique_exists(bind: Connection, table: str, columns: Sequence[str]) -> bool:
    """True if a unique index or unique constraint covers exactly ``columns``."""
    wanted = list(columns)
    insp = _insp(bind)
    for ix in insp.get_indexes(table):
        if ix.get("unique") and list(ix["column_names"]) == wanted:
            return True
    return any(list(uc["column_names"]) == wanted for uc in insp.get_unique_constraints(table))


def _probe_table(bind: Connection, name: str) -> None:
    if has_table(bind, name):
        raise DuplicateApplication("table", name)


def _probe_index(bind: Connection, table: str, name: str) -> None:
    if index_exists(bind, table, name):
        raise DuplicateApplication("index", name, table)


def _probe_unique(bind: Connection, table: str, columns: Sequence[str]) -> None:
    if unique_exists(bind, table, columns):
        raise DuplicateApplication("unique", ",".join(columns), table)


def _log_skip(exc: DuplicateApplication) -> None:
    logger.info("unit.probe.exists", extra=log_context(kind=exc.kind, object=exc.name, table=exc.table))


def create_table(op: Operations, name: str, *columns: sa.SchemaItem, **kw) -> bool:
    """Create ``name`` unless it already exists. Returns True when the table was created."""
    try:
        _probe_table(op.get_bind(), name)
    except DuplicateApplication as exc:
        _log_skip(exc)
        return False
    op.create_table(name, *columns, **kw)
    return True


def create_index(op: Operations, name: str, table: str, columns: Sequence[str], *, unique: bool = False) -> bool:
    try:
        _probe_index(op.get_bind(), table, name)
    except DuplicateApplication as exc:
        _log_skip(exc)
        return False
    op.create_index(name, table, list(columns), unique=unique)
    return True


def create_unique(op: Operations, name: str, table: str, columns: Sequence[str]) -> bool:
    """Add a unique index over ``columns`` unless some unique index or constraint already covers them."""
    try:
        _probe_unique(op.get_bind(), table, columns)
    except DuplicateApplication as exc:
        _log_skip(exc)
        return False
    op.create_index(name, table, list(columns), unique=True)
    return True


def create_indexes(op: Operations, table: str, indexes: dict[str, Sequence[str]]) -> None:
    """Create several non-unique indexes on ``table``; ``indexes`` maps name -> columns."""
    for name, columns in indexes.items():
        create_index(op, name, table, columns)


def drop_index(op: Operations, name: str, table: str) -> bool:
    bind = op.get_bind()
    if not has_table(bind, table) or not index_exists(bind, table, name):
        return False
    op.drop_index(name, table_name=table)
    return True


def drop_table(op: Operations, name: str, *enums: sa.Enum) -> bool:
    """Drop ``name`` if present, then any native enum types it owned (PostgreSQL)."""
    bind = op.get_bind()
    dropped = False
    if has_table(bind, name):
        op.drop_table(name)
        dropped = True
    if bind.dialect.name == "postgresql":
        for enum_type in enums:
            enum_type.drop(bind, checkfirst=True)
    return dropped


def enum(name: str, *values: str) -> sa.Enum:
    """Closed string set; native ENUM on MySQL/PostgreSQL, CHECK constraint elsewhere."""
    return sa.Enum(*values, name=name, create_constraint=True)


def created_at(name: str = "created_at") -> sa.Column:
    return sa.Column(name, sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP"))


def flag(name: str, default: bool) -> sa.Column:
    return sa.Column(name, sa.Boolean(), nullable=False, server_default=sa.true() if default else sa.false())


def uuid_pk() -> sa.Column:
    return sa.Column("id", sa.CHAR(36), primary_key=True, nullable=False)


def int_pk() -> sa.Column:
    return sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False)


def fk(
    column: str,
    target: str,
    *,
    ondelete: str,
    onupdate: str = "CASCADE",
    name: str | None = None,
) -> sa.ForeignKeyConstraint:
    """Foreign key with explicit update/delete actions; ``target`` is ``"table.column"``."""
    return sa.ForeignKeyConstraint([column], [target], ondelete=ondelete, onupdate=onupdate, name=name)
