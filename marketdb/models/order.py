# marketdb/models/order.py
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketdb.db.session import Base
from marketdb.db.types import GUID, StoredEnum
from marketdb.domain.enums import OrderStatus


class Order(Base):
    __tablename__ = "PEDIDOS"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    usuario_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="RESTRICT", onupdate="CASCADE"), nullable=False
    )
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    estado: Mapped[OrderStatus] = mapped_column(
        StoredEnum(OrderStatus, "pedidos_estado"), default=OrderStatus.pending, nullable=False
    )
    fecha_estimada_entrega: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    direccion_entrega: Mapped[str | None] = mapped_column(Text, nullable=True)
    notas_especiales: Mapped[str | None] = mapped_column(Text, nullable=True)
    telefono_contacto: Mapped[str | None] = mapped_column(String(20), nullable=True)
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at = mapped_column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan", passive_deletes=True)


class OrderItem(Base):
    __tablename__ = "PEDIDO_ITEMS"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pedido_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("PEDIDOS.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    producto_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("PRODUCTOS.id", ondelete="RESTRICT", onupdate="CASCADE"), nullable=False
    )
    cantidad: Mapped[int] = mapped_column(Integer, nullable=False)
    precio_unitario: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    created_at = mapped_column("createdAt", DateTime, server_default=func.now(), nullable=False)
    updated_at = mapped_column("updatedAt", DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at: Mapped[datetime | None] = mapped_column("deletedAt", DateTime, nullable=True)

    order = relationship(Order, back_populates="items")
    product = relationship("Product")
