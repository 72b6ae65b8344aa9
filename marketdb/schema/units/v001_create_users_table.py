"""create users table

Unit ID: 001_create_users_table
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic.operations import Operations

from marketdb.schema import ops
from marketdb.schema.unit import SchemaUnit

TABLE = "users"


def upgrade(op: Operations) -> None:
    ops.create_table(
        op,
        TABLE,
        ops.uuid_pk(),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("firstName", sa.String(100), nullable=True),
        sa.Column("lastName", sa.String(100), nullable=True),
        sa.Column("roleId", sa.CHAR(36), nullable=True),
        ops.flag("isActive", True),
        ops.flag("forcePasswordChange", False),
        sa.Column("lastPasswordChange", sa.DateTime(), nullable=True),
        sa.Column("lastLogin", sa.DateTime(), nullable=True),
        sa.Column("failedLoginAttempts", sa.Integer(), nullable=False, server_default=sa.text("0")),
        ops.created_at("createdAt"),
        ops.created_at("updatedAt"),
        # soft delete
        sa.Column("deletedAt", sa.DateTime(), nullable=True),
        ops.fk("roleId", "roles.id", ondelete="SET NULL", name="fk_users_role"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    ops.create_indexes(
        op,
        TABLE,
        {
            "idx_users_activo": ["isActive"],
            "idx_users_email": ["email"],
            "idx_users_roleId": ["roleId"],
        },
    )


def downgrade(op: Operations) -> None:
    ops.drop_table(op, TABLE)


unit = SchemaUnit(
    id="001_create_users_table",
    description="create users table",
    upgrade=upgrade,
    downgrade=downgrade,
    requires=("roles",),
    creates=(TABLE,),
)
