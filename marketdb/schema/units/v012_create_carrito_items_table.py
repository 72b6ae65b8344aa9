"""create cart items table

Unit ID: 012_create_carrito_items_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "CARRITO_ITEMS"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("carrito_id", sa.Integer(), nullable=False),
        sa.Column("producto_id", sa.Integer(), nullable=False),
        sa.Column("cantidad", sa.Integer(), nullable=False),
        sa.Column("precio_unitario", sa.Numeric(10, 2), nullable=False),
        ops.created_at("agregado_en"),
        ops.fk("carrito_id", "CARRITOS.id", ondelete="CASCADE", name="fk_carrito_items_carrito"),
        ops.fk("producto_id", "PRODUCTOS.id", ondelete="RESTRICT", name="fk_carrito_items_producto"),
        sa.CheckConstraint("cantidad >= 1", name="ck_carrito_items_cantidad"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_carrito_items_carrito": ["carrito_id"],
            "idx_carrito_items_producto": ["producto_id"],
        },
    )
    # una sola línea por producto en cada carrito
    ops.create_index(op, "idx_carrito_items_unique", TABLE, ["carrito_id", "producto_id"], unique=True)


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="012_create_carrito_items_table",
    description="create cart items table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("CARRITOS", "PRODUCTOS"),
    creates=(TABLE,),
)
