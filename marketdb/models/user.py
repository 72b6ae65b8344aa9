# marketdb/models/user.py
from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketdb.db.session import Base
from marketdb.db.types import GUID


class Role(Base):
    __tablename__ = "roles"

    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)
    nombre: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    descripcion: Mapped[str | None] = mapped_column(Text, nullable=True)
    activo: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)

    permissions = relationship("RolePermission", back_populates="role", cascade="all, delete-orphan", passive_deletes=True)


class User(Base):
    __tablename__ = "users"

    # Generamos el UUID en Python: la columna es CHAR(36) en todos los motores.
    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4, nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)  # hash bcrypt
    first_name: Mapped[str | None] = mapped_column("firstName", String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column("lastName", String(100), nullable=True)

    role_id: Mapped[uuid.UUID | None] = mapped_column(
        "roleId", GUID(), ForeignKey("roles.id", ondelete="SET NULL", onupdate="CASCADE"), nullable=True
    )

    # Estado de la cuenta / bloqueo por intentos fallidos
    is_active: Mapped[bool] = mapped_column("isActive", Boolean, default=True, nullable=False)
    force_password_change: Mapped[bool] = mapped_column("forcePasswordChange", Boolean, default=False, nullable=False)
    last_password_change: Mapped[datetime | None] = mapped_column("lastPasswordChange", DateTime, nullable=True)
    last_login: Mapped[datetime | None] = mapped_column("lastLogin", DateTime, nullable=True)
    failed_login_attempts: Mapped[int] = mapped_column("failedLoginAttempts", Integer, default=0, nullable=False)

    # Auditoría
    created_at = mapped_column("createdAt", DateTime, server_default=func.now(), nullable=False)
    updated_at = mapped_column("updatedAt", DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at: Mapped[datetime | None] = mapped_column("deletedAt", DateTime, nullable=True)

    role = relationship(Role, lazy="joined")


class UserRole(Base):
    __tablename__ = "USUARIO_ROLES"

    usuario_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), primary_key=True
    )
    rol_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("roles.id", ondelete="CASCADE", onupdate="CASCADE"), primary_key=True
    )
    asignado_at = mapped_column(DateTime, server_default=func.now(), nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
