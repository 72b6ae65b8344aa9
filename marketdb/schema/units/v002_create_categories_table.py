"""create categories table (self-referential tree)

Unit ID: 002_create_categories_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "CATEGORIAS"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("nombre", sa.String(100), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=True),
        sa.Column("slug", sa.String(150), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("imagen_url", sa.String(255), nullable=True),
        ops.flag("activo", True),
        sa.Column("orden", sa.Integer(), nullable=False, server_default=sa.text("0")),
        ops.created_at(),
        ops.fk("parent_id", "CATEGORIAS.id", ondelete="SET NULL", name="fk_categorias_parent"),
        sa.UniqueConstraint("slug", name="uq_categorias_slug"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_categorias_activo": ["activo"],
            "idx_categorias_orden": ["orden"],
            "idx_categorias_parent": ["parent_id"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="002_create_categories_table",
    description="create categories table",
    upgrade=upgrade,
    downgrade=downgrade,
    creates=(TABLE,),
)
