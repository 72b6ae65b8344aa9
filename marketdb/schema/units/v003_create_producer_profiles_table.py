"""create producer profiles table

Unit ID: 003_create_producer_profiles_table

Runs before products: PRODUCTOS.perfil_productor_id references this table.
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "PERFIL_PRODUCTOR"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.uuid_pk(),
        sa.Column("usuario_id", sa.CHAR(36), nullable=False),
        sa.Column("nombre_negocio", sa.String(100), nullable=False),
        sa.Column("ubicacion", sa.Text(), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("telefono", sa.String(20), nullable=True),
        sa.Column("whatsapp", sa.String(20), nullable=True),
        sa.Column("facebook_url", sa.String(255), nullable=True),
        sa.Column("instagram_url", sa.String(255), nullable=True),
        sa.Column("tiktok_url", sa.String(255), nullable=True),
        sa.Column("sitio_web", sa.String(255), nullable=True),
        sa.Column("logo_url", sa.String(255), nullable=True),
        ops.flag("verificado", False),
        ops.flag("activo", True),
        ops.created_at(),
        ops.created_at("updated_at"),
        # one-to-one con users
        ops.fk("usuario_id", "users.id", ondelete="CASCADE", name="fk_perfil_productor_usuario"),
        sa.UniqueConstraint("usuario_id", name="uq_perfil_productor_usuario"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_perfil_activo": ["activo"],
            "idx_perfil_verificado": ["verificado"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="003_create_producer_profiles_table",
    description="create producer profiles table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("users",),
    creates=(TABLE,),
)
