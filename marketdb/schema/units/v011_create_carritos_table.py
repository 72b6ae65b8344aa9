"""create carts table

Unit ID: 011_create_carritos_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "CARRITOS"
ESTADOS = ("activo", "pendiente", "completado", "cancelado")


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("usuario_id", sa.CHAR(36), nullable=True),
        sa.Column(
            "estado",
            ops.enum("carritos_estado", *ESTADOS),
            nullable=False,
            server_default="activo",
        ),
        ops.created_at("creado_en"),
        ops.created_at("actualizado_en"),
        ops.fk("usuario_id", "users.id", ondelete="SET NULL", name="fk_carritos_usuario"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_carritos_usuario": ["usuario_id"],
            "idx_carritos_estado": ["estado"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE, ops.enum("carritos_estado", *ESTADOS))


unit = SchemaUnit(
    id="011_create_carritos_table",
    description="create carts table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("users",),
    creates=(TABLE,),
)
