"""retrofit the (accion, recurso) uniqueness on PERMISOS

Unit ID: 016_fix_permisos_unique_constraint

Older databases carried a unique index on ``accion`` alone, which rejects
the same action on two resources. This unit drops that index when present and
adds the composite one only if no unique index/constraint already covers
(accion, recurso).
"""
from __future__ import annotations

import logging

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.core.logging import log_context
from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

logger = logging.getLogger(__name__)

TABLE = "PERMISOS"
COMPOSITE_INDEX = "idx_permisos_accion_recurso_unique"


def _legacy_single_column_unique(bind) -> str | None:
    for ix in sa.inspect(bind).get_indexes(TABLE):
        if ix.get("unique") and list(ix["column_names"]) == ["accion"]:
            return ix["name"]
    return None


def upgrade(op: Operations) -> None:
    bind = op.get_bind()
    legacy = _legacy_single_column_unique(bind)
    if legacy:
        logger.info("Dropping legacy unique index on PERMISOS.accion", extra=log_context(index=legacy))
        op.drop_index(legacy, table_name=TABLE)

    ops.create_unique(op, COMPOSITE_INDEX, TABLE, ["accion", "recurso"])


def downgrade(op: Operations) -> None:
    # No se restaura el índice único sobre ``accion``: era el defecto que se corrige.
    ops.drop_index(op, COMPOSITE_INDEX, TABLE)


unit = SchemaUnit(
    id="016_fix_permisos_unique_constraint",
    description="retrofit composite unique constraint on permissions",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=(TABLE,),
)
