"""Default (accion, recurso) permission catalog."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketdb.core.logging import log_context
from marketdb.models.permission import Permission
from marketdb.seeds.loader import SeedResult, SeedUnit

logger = logging.getLogger(__name__)

UNIT_ID = "002_permissions"

DEFAULT_PERMISSIONS: tuple[tuple[str, str, str], ...] = (
    # Usuarios
    ("crear", "usuarios", "Crear nuevos usuarios"),
    ("leer", "usuarios", "Ver información de usuarios"),
    ("actualizar", "usuarios", "Actualizar información de usuarios"),
    ("eliminar", "usuarios", "Eliminar usuarios"),
    # Productos
    ("crear", "productos", "Crear nuevos productos"),
    ("leer", "productos", "Ver productos"),
    ("actualizar", "productos", "Actualizar productos"),
    ("eliminar", "productos", "Eliminar productos"),
    # Categorías
    ("crear", "categorias", "Crear nuevas categorías"),
    ("leer", "categorias", "Ver categorías"),
    ("actualizar", "categorias", "Actualizar categorías"),
    ("eliminar", "categorias", "Eliminar categorías"),
    # Pedidos
    ("crear", "pedidos", "Crear nuevos pedidos"),
    ("leer", "pedidos", "Ver pedidos"),
    ("actualizar", "pedidos", "Actualizar estado de pedidos"),
    ("eliminar", "pedidos", "Cancelar pedidos"),
    # Roles y permisos
    ("crear", "roles", "Crear nuevos roles"),
    ("leer", "roles", "Ver roles"),
    ("actualizar", "roles", "Actualizar roles"),
    ("eliminar", "roles", "Eliminar roles"),
    ("asignar", "roles", "Asignar roles a usuarios"),
    # Métricas y reportes
    ("leer", "metricas", "Ver métricas y estadísticas"),
    ("exportar", "reportes", "Exportar reportes"),
    # Administración
    ("administrar", "sistema", "Administración completa del sistema"),
)


async def seed_permissions(session: AsyncSession) -> SeedResult:
    result = await session.execute(select(Permission.accion, Permission.recurso))
    existing = {tuple(row) for row in result.all()}

    created = 0
    for accion, recurso, descripcion in DEFAULT_PERMISSIONS:
        if (accion, recurso) in existing:
            continue
        session.add(Permission(accion=accion, recurso=recurso, descripcion=descripcion))
        existing.add((accion, recurso))
        created += 1

    await session.flush()
    logger.debug("Permissions seeded", extra=log_context(created=created))
    return SeedResult(UNIT_ID, created=created, skipped=len(DEFAULT_PERMISSIONS) - created)


unit = SeedUnit(UNIT_ID, "default permission catalog", seed_permissions)
