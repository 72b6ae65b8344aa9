# marketdb/models/product.py
from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
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
from marketdb.domain.enums import LotStatus, ProductType


# --- Clasificación ---
class Category(Base):
    __tablename__ = "CATEGORIAS"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(100), nullable=False)
    descripcion: Mapped[str | None] = mapped_column(Text, nullable=True)
    slug: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    parent_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("CATEGORIAS.id", ondelete="SET NULL", onupdate="CASCADE"), nullable=True
    )
    imagen_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    activo: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    orden: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)

    parent = relationship("Category", remote_side=[id], back_populates="children")
    children = relationship("Category", back_populates="parent", passive_deletes=True)


# --- Producto / servicio ofrecido por un productor ---
class Product(Base):
    __tablename__ = "PRODUCTOS"
    __table_args__ = (
        CheckConstraint("precio >= 0", name="ck_productos_precio"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    perfil_productor_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("PERFIL_PRODUCTOR.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    categoria_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("CATEGORIAS.id", ondelete="RESTRICT", onupdate="CASCADE"), nullable=False
    )
    tipo: Mapped[ProductType] = mapped_column(StoredEnum(ProductType, "productos_tipo"), nullable=False)
    nombre: Mapped[str] = mapped_column(String(150), nullable=False)
    descripcion: Mapped[str] = mapped_column(Text, nullable=False)
    precio: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    unidad: Mapped[str] = mapped_column(String(20), nullable=False)
    slug: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)

    # SEO
    meta_title: Mapped[str | None] = mapped_column(String(150), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_keywords: Mapped[str | None] = mapped_column(String(255), nullable=True)

    activo: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    destacado: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    vistas: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at = mapped_column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    producer = relationship("ProducerProfile", back_populates="products")
    category = relationship(Category)
    images = relationship(
        "ProductImage", back_populates="product", passive_deletes=True, order_by="ProductImage.orden"
    )
    lots = relationship("ProductLot", back_populates="product", passive_deletes=True)

    @validates("precio")
    def _validate_precio(self, key, value):
        if value is not None and Decimal(str(value)) < 0:
            raise ValueError("precio must be non-negative")
        return value


# --- Lotes de inventario ---
class Lot(Base):
    __tablename__ = "LOTES"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    numero_lote: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    fecha_produccion: Mapped[date] = mapped_column(Date, nullable=False)
    fecha_caducidad: Mapped[date | None] = mapped_column(Date, nullable=True)
    notas_produccion: Mapped[str | None] = mapped_column(Text, nullable=True)
    estado: Mapped[LotStatus] = mapped_column(
        StoredEnum(LotStatus, "lotes_estado"), default=LotStatus.active, nullable=False
    )
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)


class ProductLot(Base):
    __tablename__ = "PRODUCTO_LOTES"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    producto_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("PRODUCTOS.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    lote_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("LOTES.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    cantidad_inicial: Mapped[int] = mapped_column(Integer, nullable=False)
    cantidad_actual: Mapped[int] = mapped_column(Integer, nullable=False)
    cantidad_reservada: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at = mapped_column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    product = relationship(Product, back_populates="lots")
    lot = relationship(Lot, lazy="joined")

    @validates("cantidad_inicial", "cantidad_actual", "cantidad_reservada")
    def _validate_cantidad(self, key, value):
        if value is not None and value < 0:
            raise ValueError(f"{key} must be non-negative")
        return value


# --- Imágenes del producto ---
class ProductImage(Base):
    __tablename__ = "IMAGENES_PRODUCTO"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    producto_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("PRODUCTOS.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    nombre_archivo: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    texto_alternativo: Mapped[str | None] = mapped_column(String(255), nullable=True)
    es_principal: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    orden: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    tamano_bytes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tipo_mime: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)

    product = relationship(Product, back_populates="images")


# --- Reseñas ---
class ProductReview(Base):
    __tablename__ = "RESENIAS_PRODUCTO"
    __table_args__ = (
        CheckConstraint("calificacion BETWEEN 1 AND 5", name="ck_resenias_calificacion"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    usuario_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    producto_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("PRODUCTOS.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    calificacion: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    comentario: Mapped[str | None] = mapped_column(Text, nullable=True)
    verificada: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    activa: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at = mapped_column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
