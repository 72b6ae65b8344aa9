# marketdb/services/badge_service.py
from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketdb.core.logging import log_context
from marketdb.domain.enums import BadgeType
from marketdb.models.badge import Badge, UserBadge
from marketdb.models.user import User
from marketdb.services.exceptions import DomainValidationError, ResourceNotFoundError

logger = logging.getLogger(__name__)


async def list_user_badges(session: AsyncSession, user_id: uuid.UUID) -> List[UserBadge]:
    result = await session.execute(
        select(UserBadge).where(UserBadge.usuario_id == user_id).order_by(UserBadge.otorgada_at)
    )
    return list(result.scalars().all())


async def award_eligible_badges(
    session: AsyncSession,
    user_id: uuid.UUID,
    metrics: Mapping[BadgeType | str, int],
) -> List[UserBadge]:
    """Grant every active badge whose threshold the matching metric reaches.

    ``metrics`` maps a badge type (productos, valoraciones, ventas) to its
    current counter. Badges the user already holds are skipped.
    """
    if await session.get(User, user_id) is None:
        raise ResourceNotFoundError(f"User {user_id} not found.")

    counters: dict[BadgeType, int] = {}
    for key, value in metrics.items():
        try:
            badge_type = BadgeType(key)
        except ValueError:
            raise DomainValidationError(f"Unknown badge metric {key!r}.") from None
        if value < 0:
            raise DomainValidationError(f"Metric {badge_type.value!r} cannot be negative.")
        counters[badge_type] = value

    if not counters:
        return []

    held = set(
        (await session.execute(select(UserBadge.insignia_id).where(UserBadge.usuario_id == user_id))).scalars()
    )
    badges = (
        await session.execute(
            select(Badge)
            .where(Badge.activa.is_(True), Badge.tipo.in_(list(counters)))
            .order_by(Badge.tipo, Badge.umbral_requerido)
        )
    ).scalars()

    granted: List[UserBadge] = []
    for badge in badges:
        if badge.id in held or counters[badge.tipo] < badge.umbral_requerido:
            continue
        grant = UserBadge(
            usuario_id=user_id,
            insignia_id=badge.id,
            razon_otorgamiento=f"{badge.tipo.value}: {counters[badge.tipo]} >= {badge.umbral_requerido}",
        )
        session.add(grant)
        granted.append(grant)
        logger.info("badge.granted", extra=log_context(user_id=str(user_id), badge=badge.nombre))

    await session.flush()
    return granted
