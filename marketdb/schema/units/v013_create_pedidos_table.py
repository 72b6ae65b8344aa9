"""create orders table

Unit ID: 013_create_pedidos_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "PEDIDOS"
ESTADOS = ("pendiente", "confirmado", "enviado", "entregado", "cancelado")


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("usuario_id", sa.CHAR(36), nullable=False),
        sa.Column("total", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("subtotal", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "estado",
            ops.enum("pedidos_estado", *ESTADOS),
            nullable=False,
            server_default="pendiente",
        ),
        sa.Column("fecha_estimada_entrega", sa.DateTime(), nullable=True),
        sa.Column("direccion_entrega", sa.Text(), nullable=True),
        sa.Column("notas_especiales", sa.Text(), nullable=True),
        sa.Column("telefono_contacto", sa.String(20), nullable=True),
        ops.created_at(),
        ops.created_at("updated_at"),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        ops.fk("usuario_id", "users.id", ondelete="RESTRICT", name="fk_pedidos_usuario"),
        sa.CheckConstraint("total >= 0", name="ck_pedidos_total"),
        sa.CheckConstraint("subtotal >= 0", name="ck_pedidos_subtotal"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_pedidos_usuario": ["usuario_id"],
            "idx_pedidos_estado": ["estado"],
            "idx_pedidos_created": ["created_at"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE, ops.enum("pedidos_estado", *ESTADOS))


unit = SchemaUnit(
    id="013_create_pedidos_table",
    description="create orders table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("users",),
    creates=(TABLE,),
)
