"""create permissions table

Unit ID: 015_create_permisos_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "PERMISOS"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("accion", sa.String(100), nullable=False),
        sa.Column("recurso", sa.String(100), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=True),
        ops.created_at(),
    )
    ops.create_index(op, "idx_permisos_recurso", TABLE, ["recurso"])
    ops.create_index(op, "uk_permisos_accion_recurso", TABLE, ["accion", "recurso"], unique=True)


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="015_create_permisos_table",
    description="create permissions table",
    upgrade=upgrade,
    downgrade=downgrade,
    creates=(TABLE,),
)
