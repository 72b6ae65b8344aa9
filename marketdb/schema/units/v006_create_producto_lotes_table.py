"""create product/lot join table

Unit ID: 006_create_producto_lotes_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "PRODUCTO_LOTES"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("producto_id", sa.Integer(), nullable=False),
        sa.Column("lote_id", sa.Integer(), nullable=False),
        sa.Column("cantidad_inicial", sa.Integer(), nullable=False),
        sa.Column("cantidad_actual", sa.Integer(), nullable=False),
        sa.Column("cantidad_reservada", sa.Integer(), nullable=False, server_default=sa.text("0")),
        ops.created_at(),
        ops.created_at("updated_at"),
        ops.fk("producto_id", "PRODUCTOS.id", ondelete="CASCADE", name="fk_producto_lotes_producto"),
        ops.fk("lote_id", "LOTES.id", ondelete="CASCADE", name="fk_producto_lotes_lote"),
        sa.CheckConstraint("cantidad_inicial >= 0", name="ck_producto_lotes_inicial"),
        sa.CheckConstraint("cantidad_actual >= 0", name="ck_producto_lotes_actual"),
        sa.CheckConstraint("cantidad_reservada >= 0", name="ck_producto_lotes_reservada"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_producto_lotes_producto": ["producto_id"],
            "idx_producto_lotes_lote": ["lote_id"],
            "idx_producto_lotes_cantidad": ["cantidad_actual"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="006_create_producto_lotes_table",
    description="create product/lot join table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("PRODUCTOS", "LOTES"),
    creates=(TABLE,),
)
