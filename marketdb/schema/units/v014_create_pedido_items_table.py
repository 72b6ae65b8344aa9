"""create order items table

Unit ID: 014_create_pedido_items_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "PEDIDO_ITEMS"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("pedido_id", sa.Integer(), nullable=False),
        sa.Column("producto_id", sa.Integer(), nullable=False),
        sa.Column("cantidad", sa.Integer(), nullable=False),
        sa.Column("precio_unitario", sa.Numeric(10, 2), nullable=False),
        sa.Column("subtotal", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        ops.created_at("createdAt"),
        ops.created_at("updatedAt"),
        sa.Column("deletedAt", sa.DateTime(), nullable=True),
        ops.fk("pedido_id", "PEDIDOS.id", ondelete="CASCADE", name="fk_pedido_items_pedido"),
        ops.fk("producto_id", "PRODUCTOS.id", ondelete="RESTRICT", name="fk_pedido_items_producto"),
        sa.CheckConstraint("cantidad >= 1", name="ck_pedido_items_cantidad"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_pedido_items_pedido": ["pedido_id"],
            "idx_pedido_items_producto": ["producto_id"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="014_create_pedido_items_table",
    description="create order items table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("PEDIDOS", "PRODUCTOS"),
    creates=(TABLE,),
)
