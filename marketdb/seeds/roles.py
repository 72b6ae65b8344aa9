"""Base roles: admin, productor, consumidor."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketdb.models.user import Role
from marketdb.seeds.loader import SeedResult, SeedUnit

logger = logging.getLogger(__name__)

UNIT_ID = "000_roles"

ADMIN_ROLE = "admin"

DEFAULT_ROLES: tuple[tuple[str, str], ...] = (
    (ADMIN_ROLE, "Administrador del sistema"),
    ("productor", "Usuario productor"),
    ("consumidor", "Usuario consumidor"),
)


async def get_role(session: AsyncSession, nombre: str) -> Role | None:
    result = await session.execute(select(Role).where(Role.nombre == nombre))
    return result.scalar_one_or_none()


async def seed_roles(session: AsyncSession) -> SeedResult:
    result = await session.execute(select(Role.nombre))
    existing = set(result.scalars())

    created = 0
    for nombre, descripcion in DEFAULT_ROLES:
        if nombre in existing:
            logger.debug("Skipped role %s (already present)", nombre)
            continue
        session.add(Role(nombre=nombre, descripcion=descripcion, activo=True))
        created += 1
        logger.debug("Created role %s", nombre)

    await session.flush()
    return SeedResult(UNIT_ID, created=created, skipped=len(DEFAULT_ROLES) - created)


unit = SeedUnit(UNIT_ID, "base roles", seed_roles)
