"""create daily seller metrics table

Unit ID: 020_create_metricas_vendedor_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "METRICAS_VENDEDOR"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("perfil_productor_id", sa.CHAR(36), nullable=False),
        sa.Column("fecha", sa.Date(), nullable=False),
        sa.Column("vistas_perfil", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("productos_visitados", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("contactos_recibidos", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("nuevas_valoraciones", sa.Integer(), nullable=False, server_default=sa.text("0")),
        ops.created_at(),
        ops.fk(
            "perfil_productor_id",
            "PERFIL_PRODUCTOR.id",
            ondelete="CASCADE",
            name="fk_metricas_vendedor_perfil",
        ),
        sa.UniqueConstraint("perfil_productor_id", "fecha", name="ux_metricas_vendedor_fecha"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_metricas_vendedor_perfil": ["perfil_productor_id"],
            "idx_metricas_vendedor_fecha": ["fecha"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="020_create_metricas_vendedor_table",
    description="create daily seller metrics table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("PERFIL_PRODUCTOR",),
    creates=(TABLE,),
)
