"""create user/role join table

Unit ID: 017_create_usuario_roles_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "USUARIO_ROLES"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        sa.Column("usuario_id", sa.CHAR(36), primary_key=True, nullable=False),
        sa.Column("rol_id", sa.CHAR(36), primary_key=True, nullable=False),
        ops.created_at("asignado_at"),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        ops.fk("usuario_id", "users.id", ondelete="CASCADE", name="fk_usuario_roles_usuario"),
        ops.fk("rol_id", "roles.id", ondelete="CASCADE", name="fk_usuario_roles_rol"),
    )
    ops.create_index(op, "idx_usuario_roles_expires", TABLE, ["expires_at"])


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="017_create_usuario_roles_table",
    description="create user/role join table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("users", "roles"),
    creates=(TABLE,),
)
