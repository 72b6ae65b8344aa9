"""create entrepreneur statistics table

Unit ID: 021_create_estadisticas_emprendedor_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "ESTADISTICAS_EMPRENDEDOR"


def _counter(name: str) -> sa.Column:
    return sa.Column(name, sa.Integer(), nullable=False, server_default=sa.text("0"))


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("perfil_productor_id", sa.CHAR(36), nullable=False),
        _counter("total_productos"),
        _counter("total_servicios"),
        _counter("total_vistas"),
        _counter("total_contactos"),
        sa.Column("rating_promedio_productos", sa.Numeric(3, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("rating_promedio_vendedor", sa.Numeric(3, 2), nullable=False, server_default=sa.text("0")),
        _counter("total_valoraciones_productos"),
        _counter("total_valoraciones_vendedor"),
        _counter("insignias_obtenidas"),
        ops.created_at("last_updated"),
        ops.fk(
            "perfil_productor_id",
            "PERFIL_PRODUCTOR.id",
            ondelete="CASCADE",
            name="fk_estadisticas_perfil",
        ),
        sa.UniqueConstraint("perfil_productor_id", name="uq_estadisticas_perfil"),
        sa.CheckConstraint(
            "rating_promedio_productos >= 0 AND rating_promedio_productos <= 5",
            name="ck_estadisticas_rating_productos",
        ),
        sa.CheckConstraint(
            "rating_promedio_vendedor >= 0 AND rating_promedio_vendedor <= 5",
            name="ck_estadisticas_rating_vendedor",
        ),
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="021_create_estadisticas_emprendedor_table",
    description="create entrepreneur statistics table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("PERFIL_PRODUCTOR",),
    creates=(TABLE,),
)
