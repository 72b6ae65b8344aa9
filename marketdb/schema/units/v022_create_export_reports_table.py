"""create export reports table

Unit ID: 022_create_export_reports_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "EXPORT_REPORTS"
TIPOS = ("productos", "metricas", "valoraciones", "contactos")
FORMATOS = ("csv", "pdf", "excel")
ESTADOS = ("generando", "completado", "error")


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("usuario_id", sa.CHAR(36), nullable=False),
        sa.Column("tipo_reporte", ops.enum("export_reports_tipo", *TIPOS), nullable=False),
        sa.Column("formato", ops.enum("export_reports_formato", *FORMATOS), nullable=False),
        # JSON serializado
        sa.Column("parametros_filtro", sa.Text(), nullable=True),
        sa.Column("nombre_archivo", sa.String(255), nullable=True),
        sa.Column("url_descarga", sa.String(500), nullable=True),
        sa.Column(
            "estado",
            ops.enum("export_reports_estado", *ESTADOS),
            nullable=False,
            server_default="generando",
        ),
        ops.created_at("solicitado_at"),
        sa.Column("completado_at", sa.DateTime(), nullable=True),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        ops.fk("usuario_id", "users.id", ondelete="CASCADE", name="fk_export_reports_usuario"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_export_reports_usuario": ["usuario_id"],
            "idx_export_reports_estado": ["estado"],
            "idx_export_reports_expires": ["expires_at"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(
        op,
        TABLE,
        ops.enum("export_reports_tipo", *TIPOS),
        ops.enum("export_reports_formato", *FORMATOS),
        ops.enum("export_reports_estado", *ESTADOS),
    )


unit = SchemaUnit(
    id="022_create_export_reports_table",
    description="create export reports table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("users",),
    creates=(TABLE,),
)
