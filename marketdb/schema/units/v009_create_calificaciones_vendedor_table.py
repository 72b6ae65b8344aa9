"""create seller ratings table

Unit ID: 009_create_calificaciones_vendedor_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "CALIFICACIONES_VENDEDOR"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("usuario_id", sa.CHAR(36), nullable=False),
        sa.Column("perfil_productor_id", sa.CHAR(36), nullable=False),
        sa.Column("calificacion", sa.SmallInteger(), nullable=False),
        sa.Column("comentario", sa.Text(), nullable=True),
        ops.flag("verificada", False),
        ops.flag("activa", True),
        ops.created_at(),
        ops.fk("usuario_id", "users.id", ondelete="CASCADE", name="fk_calificaciones_usuario"),
        ops.fk(
            "perfil_productor_id",
            "PERFIL_PRODUCTOR.id",
            ondelete="CASCADE",
            name="fk_calificaciones_perfil",
        ),
        sa.CheckConstraint("calificacion BETWEEN 1 AND 5", name="ck_calificaciones_calificacion"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_calificaciones_perfil": ["perfil_productor_id"],
            "idx_calificaciones_usuario": ["usuario_id"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="009_create_calificaciones_vendedor_table",
    description="create seller ratings table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("users", "PERFIL_PRODUCTOR"),
    creates=(TABLE,),
)
