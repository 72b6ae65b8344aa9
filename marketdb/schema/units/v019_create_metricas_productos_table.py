"""create daily product metrics table

Unit ID: 019_create_metricas_productos_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "METRICAS_PRODUCTOS"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("producto_id", sa.Integer(), nullable=False),
        sa.Column("fecha", sa.Date(), nullable=False),
        sa.Column("vistas_diarias", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("contactos_generados", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("valoraciones_recibidas", sa.Integer(), nullable=False, server_default=sa.text("0")),
        ops.created_at(),
        ops.fk("producto_id", "PRODUCTOS.id", ondelete="CASCADE", name="fk_metricas_productos_producto"),
        # una fila por producto y día
        sa.UniqueConstraint("producto_id", "fecha", name="ux_metricas_producto_fecha"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_metricas_productos_producto": ["producto_id"],
            "idx_metricas_productos_fecha": ["fecha"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="019_create_metricas_productos_table",
    description="create daily product metrics table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("PRODUCTOS",),
    creates=(TABLE,),
)
