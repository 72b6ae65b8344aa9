"""create products table

Unit ID: 004_create_products_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "PRODUCTOS"
TIPOS = ("producto", "servicio")


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("perfil_productor_id", sa.CHAR(36), nullable=False),
        sa.Column("categoria_id", sa.Integer(), nullable=False),
        sa.Column("tipo", ops.enum("productos_tipo", *TIPOS), nullable=False),
        sa.Column("nombre", sa.String(150), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=False),
        sa.Column("precio", sa.Numeric(10, 2), nullable=False),
        sa.Column("unidad", sa.String(20), nullable=False),
        sa.Column("slug", sa.String(150), nullable=False),
        sa.Column("meta_title", sa.String(150), nullable=True),
        sa.Column("meta_description", sa.Text(), nullable=True),
        sa.Column("meta_keywords", sa.String(255), nullable=True),
        ops.flag("activo", True),
        ops.flag("destacado", False),
        sa.Column("vistas", sa.Integer(), nullable=False, server_default=sa.text("0")),
        ops.created_at(),
        ops.created_at("updated_at"),
        ops.fk("perfil_productor_id", "PERFIL_PRODUCTOR.id", ondelete="CASCADE", name="fk_productos_perfil"),
        ops.fk("categoria_id", "CATEGORIAS.id", ondelete="RESTRICT", name="fk_productos_categoria"),
        sa.UniqueConstraint("slug", name="uq_productos_slug"),
        sa.CheckConstraint("precio >= 0", name="ck_productos_precio"),
        sa.CheckConstraint("vistas >= 0", name="ck_productos_vistas"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_productos_perfil": ["perfil_productor_id"],
            "idx_productos_categoria": ["categoria_id"],
            "idx_productos_activo": ["activo"],
            "idx_productos_destacado": ["destacado"],
            "idx_productos_tipo": ["tipo"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE, ops.enum("productos_tipo", *TIPOS))


unit = SchemaUnit(
    id="004_create_products_table",
    description="create products table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("PERFIL_PRODUCTOR", "CATEGORIAS"),
    creates=(TABLE,),
)
