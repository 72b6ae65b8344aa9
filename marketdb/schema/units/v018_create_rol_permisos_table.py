"""create role/permission join table

Unit ID: 018_create_rol_permisos_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "ROL_PERMISOS"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        sa.Column("rol_id", sa.CHAR(36), primary_key=True, nullable=False),
        sa.Column("permiso_id", sa.Integer(), primary_key=True, autoincrement=False, nullable=False),
        ops.created_at(),
        ops.fk("rol_id", "roles.id", ondelete="CASCADE", name="fk_rol_permisos_rol"),
        ops.fk("permiso_id", "PERMISOS.id", ondelete="CASCADE", name="fk_rol_permisos_permiso"),
    )
    ops.create_index(op, "idx_rol_permisos_permiso", TABLE, ["permiso_id"])


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="018_create_rol_permisos_table",
    description="create role/permission join table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("roles", "PERMISOS"),
    creates=(TABLE,),
)
