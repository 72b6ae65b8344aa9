# marketdb/models/permission.py
from __future__ import annotations

import uuid

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketdb.db.session import Base
from marketdb.db.types import GUID


class Permission(Base):
    __tablename__ = "PERMISOS"
    __table_args__ = (
        Index("uk_permisos_accion_recurso", "accion", "recurso", unique=True),
        Index("idx_permisos_recurso", "recurso"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    accion: Mapped[str] = mapped_column(String(100), nullable=False)
    recurso: Mapped[str] = mapped_column(String(100), nullable=False)
    descripcion: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)

    @property
    def code(self) -> str:
        return f"{self.accion}:{self.recurso}"


class RolePermission(Base):
    __tablename__ = "ROL_PERMISOS"

    rol_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("roles.id", ondelete="CASCADE", onupdate="CASCADE"), primary_key=True
    )
    permiso_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("PERMISOS.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
        autoincrement=False,
    )
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)

    role = relationship("Role", back_populates="permissions")
    permission = relationship(Permission, lazy="joined")
