# marketdb/models/badge.py
from __future__ import annotations

import uuid

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketdb.db.session import Base
from marketdb.db.types import GUID, StoredEnum
from marketdb.domain.enums import BadgeType


class Badge(Base):
    __tablename__ = "INSIGNIAS"
    __table_args__ = (CheckConstraint("umbral_requerido >= 1", name="ck_insignias_umbral"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    descripcion: Mapped[str] = mapped_column(Text, nullable=False)
    icono_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    color_hex: Mapped[str | None] = mapped_column(String(7), nullable=True)
    tipo: Mapped[BadgeType] = mapped_column(StoredEnum(BadgeType, "insignias_tipo"), nullable=False)
    umbral_requerido: Mapped[int] = mapped_column(Integer, nullable=False)
    activa: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)


class UserBadge(Base):
    __tablename__ = "USUARIO_INSIGNIAS"
    __table_args__ = (UniqueConstraint("usuario_id", "insignia_id", name="ux_usuario_insignia"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    usuario_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    insignia_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("INSIGNIAS.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    otorgada_at = mapped_column(DateTime, server_default=func.now(), nullable=False)
    razon_otorgamiento: Mapped[str | None] = mapped_column(Text, nullable=True)

    badge = relationship(Badge, lazy="joined")
