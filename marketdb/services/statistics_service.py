# marketdb/services/statistics_service.py
from __future__ import annotations

import logging
import uuid
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from marketdb.core.logging import log_context
from marketdb.domain.enums import ProductType
from marketdb.models.badge import UserBadge
from marketdb.models.producer import (
    RATING_MAX,
    RATING_MIN,
    Contact,
    EntrepreneurStatistics,
    ProducerProfile,
    SellerRating,
)
from marketdb.models.product import Product, ProductReview
from marketdb.services.exceptions import ResourceNotFoundError

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


def normalize_rating(value) -> Decimal:
    """Redondea a 2 decimales y acota a [0.00, 5.00]. None -> 0.00."""
    if value is None:
        return RATING_MIN
    rating = Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return max(RATING_MIN, min(RATING_MAX, rating))


async def _scalar(session: AsyncSession, stmt) -> int:
    result = await session.execute(stmt)
    return int(result.scalar() or 0)


async def refresh_statistics(session: AsyncSession, profile_id: uuid.UUID) -> EntrepreneurStatistics:
    """Recompute a producer profile's aggregates and upsert its statistics row."""
    profile = await session.get(ProducerProfile, profile_id)
    if profile is None:
        raise ResourceNotFoundError(f"Producer profile {profile_id} not found.")

    products_q = select(func.count(Product.id)).where(
        Product.perfil_productor_id == profile_id, Product.activo.is_(True)
    )
    total_productos = await _scalar(session, products_q.where(Product.tipo == ProductType.product))
    total_servicios = await _scalar(session, products_q.where(Product.tipo == ProductType.service))
    total_vistas = await _scalar(
        session,
        select(func.coalesce(func.sum(Product.vistas), 0)).where(Product.perfil_productor_id == profile_id),
    )
    total_contactos = await _scalar(
        session, select(func.count(Contact.id)).where(Contact.emprendedor_id == profile_id)
    )

    review_row = (
        await session.execute(
            select(func.avg(ProductReview.calificacion), func.count(ProductReview.id))
            .join(Product, Product.id == ProductReview.producto_id)
            .where(Product.perfil_productor_id == profile_id, ProductReview.activa.is_(True))
        )
    ).one()
    seller_row = (
        await session.execute(
            select(func.avg(SellerRating.calificacion), func.count(SellerRating.id)).where(
                SellerRating.perfil_productor_id == profile_id, SellerRating.activa.is_(True)
            )
        )
    ).one()
    insignias = await _scalar(
        session, select(func.count(UserBadge.id)).where(UserBadge.usuario_id == profile.usuario_id)
    )

    result = await session.execute(
        select(EntrepreneurStatistics).where(EntrepreneurStatistics.perfil_productor_id == profile_id)
    )
    stats = result.scalar_one_or_none()
    if stats is None:
        stats = EntrepreneurStatistics(perfil_productor_id=profile_id)
        session.add(stats)

    stats.total_productos = total_productos
    stats.total_servicios = total_servicios
    stats.total_vistas = total_vistas
    stats.total_contactos = total_contactos
    stats.rating_promedio_productos = normalize_rating(review_row[0])
    stats.total_valoraciones_productos = int(review_row[1] or 0)
    stats.rating_promedio_vendedor = normalize_rating(seller_row[0])
    stats.total_valoraciones_vendedor = int(seller_row[1] or 0)
    stats.insignias_obtenidas = insignias

    await session.flush()
    logger.info(
        "statistics.refreshed",
        extra=log_context(profile_id=str(profile_id), productos=total_productos, servicios=total_servicios),
    )
    return stats
