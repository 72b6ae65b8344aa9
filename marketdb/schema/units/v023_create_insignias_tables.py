"""create badge catalog and user badge grant tables

Unit ID: 023_create_insignias_tables
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

BADGES = "INSIGNIAS"
GRANTS = "USUARIO_INSIGNIAS"
TIPOS = ("productos", "valoraciones", "ventas")


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        BADGES,
        ops.int_pk(),
        sa.Column("nombre", sa.String(100), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=False),
        sa.Column("icono_url", sa.String(255), nullable=True),
        sa.Column("color_hex", sa.String(7), nullable=True),
        sa.Column("tipo", ops.enum("insignias_tipo", *TIPOS), nullable=False),
        sa.Column("umbral_requerido", sa.Integer(), nullable=False),
        ops.flag("activa", True),
        ops.created_at(),
        sa.UniqueConstraint("nombre", name="uq_insignias_nombre"),
        sa.CheckConstraint("umbral_requerido >= 1", name="ck_insignias_umbral"),
    )
    ops.create_table(
        op,
        GRANTS,
        ops.int_pk(),
        sa.Column("usuario_id", sa.CHAR(36), nullable=False),
        sa.Column("insignia_id", sa.Integer(), nullable=False),
        ops.created_at("otorgada_at"),
        sa.Column("razon_otorgamiento", sa.Text(), nullable=True),
        ops.fk("usuario_id", "users.id", ondelete="CASCADE", name="fk_usuario_insignias_usuario"),
        ops.fk("insignia_id", "INSIGNIAS.id", ondelete="CASCADE", name="fk_usuario_insignias_insignia"),
        sa.UniqueConstraint("usuario_id", "insignia_id", name="ux_usuario_insignia"),
    )
    ops.create_indexes(
        op,
        BADGES,
        {
            "idx_insignias_activa": ["activa"],
            "idx_insignias_tipo": ["tipo"],
        },
    )
    ops.create_indexes(
        op,
        GRANTS,
        {
            "idx_usuario_insignias_usuario": ["usuario_id"],
            "idx_usuario_insignias_insignia": ["insignia_id"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, GRANTS)
    ops.drop_table(op, BADGES, ops.enum("insignias_tipo", *TIPOS))


unit = SchemaUnit(
    id="023_create_insignias_tables",
    description="create badge tables",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("users",),
    creates=(BADGES, GRANTS),
)
