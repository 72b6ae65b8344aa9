"""Default gamification badges."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketdb.domain.enums import BadgeType
from marketdb.models.badge import Badge
from marketdb.seeds.loader import SeedResult, SeedUnit

logger = logging.getLogger(__name__)

UNIT_ID = "004_badges"


@dataclass(frozen=True, slots=True)
class BadgeSeed:
    nombre: str
    descripcion: str
    icono_url: str
    color_hex: str
    tipo: BadgeType
    umbral_requerido: int
    activa: bool = True


DEFAULT_BADGES: tuple[BadgeSeed, ...] = (
    # Productos
    BadgeSeed("Primer Producto", "Felicidades por crear tu primer producto en la plataforma",
              "/icons/first-product.svg", "#4CAF50", BadgeType.products, 1),
    BadgeSeed("Productor Activo", "Has creado 5 productos, ¡sigue así!",
              "/icons/active-producer.svg", "#2196F3", BadgeType.products, 5),
    BadgeSeed("Productor Experto", "Increíble, ya tienes 10 productos en tu catálogo",
              "/icons/expert-producer.svg", "#FF9800", BadgeType.products, 10),
    BadgeSeed("Maestro Productor", "Impresionante, has alcanzado 25 productos",
              "/icons/master-producer.svg", "#9C27B0", BadgeType.products, 25),
    BadgeSeed("Leyenda del Catálogo", "Extraordinario, tienes 50 productos o más",
              "/icons/catalog-legend.svg", "#F44336", BadgeType.products, 50),
    # Valoraciones
    BadgeSeed("Primera Valoración", "Has recibido tu primera valoración de un cliente",
              "/icons/first-rating.svg", "#FFEB3B", BadgeType.ratings, 1),
    BadgeSeed("Bien Valorado", "Has recibido 10 valoraciones de tus productos",
              "/icons/well-rated.svg", "#8BC34A", BadgeType.ratings, 10),
    BadgeSeed("Muy Valorado", "Excelente, ya tienes 25 valoraciones",
              "/icons/highly-rated.svg", "#4CAF50", BadgeType.ratings, 25),
    BadgeSeed("Súper Valorado", "Increíble, has alcanzado 50 valoraciones",
              "/icons/super-rated.svg", "#00BCD4", BadgeType.ratings, 50),
    BadgeSeed("Estrella de la Plataforma", "Eres una estrella con 100 valoraciones o más",
              "/icons/platform-star.svg", "#FFD700", BadgeType.ratings, 100),
    # Ventas: desactivadas hasta que exista el flujo de ventas
    BadgeSeed("Primera Venta", "Felicidades por tu primera venta completada",
              "/icons/first-sale.svg", "#4CAF50", BadgeType.sales, 1, activa=False),
    BadgeSeed("Vendedor Exitoso", "Has completado 10 ventas exitosas",
              "/icons/successful-seller.svg", "#2196F3", BadgeType.sales, 10, activa=False),
)


async def seed_badges(session: AsyncSession) -> SeedResult:
    result = await session.execute(select(Badge.nombre))
    existing = set(result.scalars())

    created = 0
    for seed in DEFAULT_BADGES:
        if seed.nombre in existing:
            logger.debug("Skipped badge %s (already present)", seed.nombre)
            continue
        session.add(Badge(**asdict(seed)))
        created += 1
        logger.debug("Created badge %s", seed.nombre)

    await session.flush()
    return SeedResult(UNIT_ID, created=created, skipped=len(DEFAULT_BADGES) - created)


unit = SeedUnit(UNIT_ID, "default badges", seed_badges)
