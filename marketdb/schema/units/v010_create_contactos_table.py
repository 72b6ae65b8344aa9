"""create contacts (leads) table

Unit ID: 010_create_contactos_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "CONTACTOS"
ESTADOS = ("nuevo", "leido", "respondido", "cerrado")


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.int_pk(),
        sa.Column("emprendedor_id", sa.CHAR(36), nullable=False),
        sa.Column("usuario_id", sa.CHAR(36), nullable=True),
        sa.Column("nombre_contacto", sa.String(150), nullable=False),
        sa.Column("email_contacto", sa.String(150), nullable=False),
        sa.Column("telefono_contacto", sa.String(20), nullable=True),
        sa.Column("producto_id", sa.Integer(), nullable=True),
        sa.Column("mensaje", sa.Text(), nullable=False),
        sa.Column(
            "estado",
            ops.enum("contactos_estado", *ESTADOS),
            nullable=False,
            server_default="nuevo",
        ),
        ops.created_at(),
        ops.created_at("updated_at"),
        ops.fk("emprendedor_id", "PERFIL_PRODUCTOR.id", ondelete="CASCADE", name="fk_contactos_emprendedor"),
        # borrar el usuario o el producto no borra el lead
        ops.fk("usuario_id", "users.id", ondelete="SET NULL", name="fk_contactos_usuario"),
        ops.fk("producto_id", "PRODUCTOS.id", ondelete="SET NULL", name="fk_contactos_producto"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_contactos_emprendedor": ["emprendedor_id"],
            "idx_contactos_producto": ["producto_id"],
            "idx_contactos_estado": ["estado"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE, ops.enum("contactos_estado", *ESTADOS))


unit = SchemaUnit(
    id="010_create_contactos_table",
    description="create contacts table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("PERFIL_PRODUCTOR", "users", "PRODUCTOS"),
    creates=(TABLE,),
)
