"""create product reviews table

Unit ID: 008_create_resenias_producto_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "RESENIAS_PRODUCTO"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("usuario_id", sa.CHAR(36), nullable=False),
        sa.Column("producto_id", sa.Integer(), nullable=False),
        sa.Column("calificacion", sa.SmallInteger(), nullable=False),
        sa.Column("comentario", sa.Text(), nullable=True),
        ops.flag("verificada", False),
        ops.flag("activa", True),
        ops.created_at(),
        ops.created_at("updated_at"),
        ops.fk("usuario_id", "users.id", ondelete="CASCADE", name="fk_resenias_usuario"),
        ops.fk("producto_id", "PRODUCTOS.id", ondelete="CASCADE", name="fk_resenias_producto"),
        sa.CheckConstraint("calificacion BETWEEN 1 AND 5", name="ck_resenias_calificacion"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_resenias_producto": ["producto_id"],
            "idx_resenias_usuario": ["usuario_id"],
            "idx_resenias_activa": ["activa"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="008_create_resenias_producto_table",
    description="create product reviews table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("users", "PRODUCTOS"),
    creates=(TABLE,),
)
