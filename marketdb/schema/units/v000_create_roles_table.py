"""create roles table

Unit ID: 000_create_roles_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "roles"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.uuid_pk(),
        sa.Column("nombre", sa.String(50), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=True),
        ops.flag("activo", True),
        ops.created_at(),
        sa.UniqueConstraint("nombre", name="uq_roles_nombre"),
    )
    ops.create_index(op, "idx_roles_activo", TABLE, ["activo"])


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="000_create_roles_table",
    description="create roles table",
    upgrade=upgrade,
    downgrade=downgrade,
    creates=(TABLE,),
)
