# marketdb/models/metrics.py
from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Date, DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from marketdb.db.session import Base
from marketdb.db.types import GUID


class ProductMetric(Base):
    """Daily counters per product, one row per product and date."""

    __tablename__ = "METRICAS_PRODUCTOS"
    __table_args__ = (UniqueConstraint("producto_id", "fecha", name="ux_metricas_producto_fecha"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    producto_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("PRODUCTOS.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    fecha: Mapped[date] = mapped_column(Date, nullable=False)
    vistas_diarias: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    contactos_generados: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    valoraciones_recibidas: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)


class SellerMetric(Base):
    __tablename__ = "METRICAS_VENDEDOR"
    __table_args__ = (UniqueConstraint("perfil_productor_id", "fecha", name="ux_metricas_vendedor_fecha"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    perfil_productor_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("PERFIL_PRODUCTOR.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    fecha: Mapped[date] = mapped_column(Date, nullable=False)
    vistas_perfil: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    productos_visitados: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    contactos_recibidos: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    nuevas_valoraciones: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)
