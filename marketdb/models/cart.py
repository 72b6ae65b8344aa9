# marketdb/models/cart.py
from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Numeric, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketdb.db.session import Base
from marketdb.db.types import GUID, StoredEnum
from marketdb.domain.enums import CartStatus


class Cart(Base):
    __tablename__ = "CARRITOS"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # null = el usuario fue eliminado; el carrito se conserva como historial
    usuario_id: Mapped[uuid.UUID | None] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="SET NULL", onupdate="CASCADE"), nullable=True
    )
    estado: Mapped[CartStatus] = mapped_column(
        StoredEnum(CartStatus, "carritos_estado"), default=CartStatus.active, nullable=False
    )
    creado_en = mapped_column(DateTime, server_default=func.now(), nullable=False)
    actualizado_en = mapped_column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class CartItem(Base):
    __tablename__ = "CARRITO_ITEMS"
    __table_args__ = (
        Index("idx_carrito_items_unique", "carrito_id", "producto_id", unique=True),
        CheckConstraint("cantidad >= 1", name="ck_carrito_items_cantidad"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    carrito_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("CARRITOS.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    producto_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("PRODUCTOS.id", ondelete="RESTRICT", onupdate="CASCADE"), nullable=False
    )
    cantidad: Mapped[int] = mapped_column(Integer, nullable=False)
    precio_unitario: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    agregado_en = mapped_column(DateTime, server_default=func.now(), nullable=False)

    cart = relationship(Cart, back_populates="items")
    product = relationship("Product")

    @property
    def line_total(self) -> Decimal:
        return Decimal(self.precio_unitario) * self.cantidad
