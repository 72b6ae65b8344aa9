"""create product images table

Unit ID: 007_create_imagenes_producto_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "IMAGENES_PRODUCTO"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("producto_id", sa.Integer(), nullable=False),
        sa.Column("nombre_archivo", sa.String(255), nullable=False),
        sa.Column("url", sa.String(500), nullable=False),
        sa.Column("texto_alternativo", sa.String(255), nullable=True),
        ops.flag("es_principal", False),
        sa.Column("orden", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("tamano_bytes", sa.Integer(), nullable=True),
        sa.Column("tipo_mime", sa.String(100), nullable=True),
        ops.created_at(),
        ops.fk("producto_id", "PRODUCTOS.id", ondelete="CASCADE", name="fk_imagenes_producto"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_imagenes_producto": ["producto_id"],
            "idx_imagenes_orden": ["orden"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="007_create_imagenes_producto_table",
    description="create product images table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("PRODUCTOS",),
    creates=(TABLE,),
)
