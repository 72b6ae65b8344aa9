# marketdb/models/producer.py
from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    SmallInteger,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from marketdb.db.session import Base
from marketdb.db.types import GUID, StoredEnum
from marketdb.domain.enums import ContactStatus

RATING_MIN = Decimal("0.00")
RATING_MAX = Decimal("5.00")


class ProducerProfile(Base):
    __tablename__ = "PERFIL_PRODUCTOR"

    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)
    # one-to-one con users
    usuario_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), unique=True, nullable=False
    )
    nombre_negocio: Mapped[str] = mapped_column(String(100), nullable=False)
    ubicacion: Mapped[str] = mapped_column(Text, nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    telefono: Mapped[str | None] = mapped_column(String(20), nullable=True)
    whatsapp: Mapped[str | None] = mapped_column(String(20), nullable=True)
    facebook_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    instagram_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tiktok_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sitio_web: Mapped[str | None] = mapped_column(String(255), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    verificado: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    activo: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at = mapped_column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User")
    products = relationship("Product", back_populates="producer", passive_deletes=True)
    statistics = relationship(
        "EntrepreneurStatistics", back_populates="producer", uselist=False, passive_deletes=True
    )


class SellerRating(Base):
    __tablename__ = "CALIFICACIONES_VENDEDOR"
    __table_args__ = (
        CheckConstraint("calificacion BETWEEN 1 AND 5", name="ck_calificaciones_calificacion"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    usuario_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    perfil_productor_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("PERFIL_PRODUCTOR.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    calificacion: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    comentario: Mapped[str | None] = mapped_column(Text, nullable=True)
    verificada: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    activa: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)


class Contact(Base):
    """Lead or inquiry addressed to an entrepreneur."""

    __tablename__ = "CONTACTOS"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    emprendedor_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("PERFIL_PRODUCTOR.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    usuario_id: Mapped[uuid.UUID | None] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="SET NULL", onupdate="CASCADE"), nullable=True
    )
    nombre_contacto: Mapped[str] = mapped_column(String(150), nullable=False)
    email_contacto: Mapped[str] = mapped_column(String(150), nullable=False)
    telefono_contacto: Mapped[str | None] = mapped_column(String(20), nullable=True)
    producto_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("PRODUCTOS.id", ondelete="SET NULL", onupdate="CASCADE"), nullable=True
    )
    mensaje: Mapped[str] = mapped_column(Text, nullable=False)
    estado: Mapped[ContactStatus] = mapped_column(
        StoredEnum(ContactStatus, "contactos_estado"), default=ContactStatus.new, nullable=False
    )
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at = mapped_column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)


class EntrepreneurStatistics(Base):
    __tablename__ = "ESTADISTICAS_EMPRENDEDOR"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    perfil_productor_id: Mapped[uuid.UUID] = mapped_column(
        GUID(),
        ForeignKey("PERFIL_PRODUCTOR.id", ondelete="CASCADE", onupdate="CASCADE"),
        unique=True,
        nullable=False,
    )
    total_productos: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_servicios: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_vistas: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_contactos: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    rating_promedio_productos: Mapped[Decimal] = mapped_column(Numeric(3, 2), default=RATING_MIN, nullable=False)
    rating_promedio_vendedor: Mapped[Decimal] = mapped_column(Numeric(3, 2), default=RATING_MIN, nullable=False)
    total_valoraciones_productos: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_valoraciones_vendedor: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    insignias_obtenidas: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_updated = mapped_column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    producer = relationship(ProducerProfile, back_populates="statistics")

    @validates("rating_promedio_productos", "rating_promedio_vendedor")
    def _validate_rating(self, key, value):
        rating = Decimal(str(value))
        if rating < RATING_MIN or rating > RATING_MAX:
            raise ValueError(f"{key} must be within [0.00, 5.00], got {rating}")
        return rating
