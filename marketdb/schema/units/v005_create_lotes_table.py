"""create inventory lots table

Unit ID: 005_create_lotes_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "LOTES"
ESTADOS = ("activo", "agotado", "vencido")


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("numero_lote", sa.String(50), nullable=False),
        sa.Column("fecha_produccion", sa.Date(), nullable=False),
        sa.Column("fecha_caducidad", sa.Date(), nullable=True),
        sa.Column("notas_produccion", sa.Text(), nullable=True),
        sa.Column(
            "estado",
            ops.enum("lotes_estado", *ESTADOS),
            nullable=False,
            server_default="activo",
        ),
        ops.created_at(),
        sa.UniqueConstraint("numero_lote", name="uq_lotes_numero"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_lotes_estado": ["estado"],
            "idx_lotes_fecha_caducidad": ["fecha_caducidad"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE, ops.enum("lotes_estado", *ESTADOS))


unit = SchemaUnit(
    id="005_create_lotes_table",
    description="create inventory lots table",
    upgrade=upgrade,
    downgrade=downgrade,
    creates=(TABLE,),
)
