"""Grant every permission to the admin role."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketdb.models.permission import Permission, RolePermission
from marketdb.schema.exceptions import OrderingViolation
from marketdb.seeds.loader import SeedResult, SeedUnit
from marketdb.seeds.roles import ADMIN_ROLE, get_role

logger = logging.getLogger(__name__)

UNIT_ID = "003_admin_permissions"


async def seed_admin_permissions(session: AsyncSession) -> SeedResult:
    # Ambos prerrequisitos se validan antes de escribir nada.
    admin_role = await get_role(session, ADMIN_ROLE)
    if admin_role is None:
        raise OrderingViolation(
            UNIT_ID,
            (f"roles.nombre={ADMIN_ROLE}",),
            "Admin role not found. Run the roles seed unit first.",
        )

    result = await session.execute(select(Permission.id).order_by(Permission.id))
    permission_ids = list(result.scalars())
    if not permission_ids:
        raise OrderingViolation(
            UNIT_ID,
            ("PERMISOS",),
            "No permissions found. Run the permissions seed unit first.",
        )

    result = await session.execute(
        select(RolePermission.permiso_id).where(RolePermission.rol_id == admin_role.id)
    )
    linked = set(result.scalars())

    missing = [pid for pid in permission_ids if pid not in linked]
    for pid in missing:
        session.add(RolePermission(rol_id=admin_role.id, permiso_id=pid))

    await session.flush()
    logger.info("Linked %s permission(s) to the admin role", len(missing))
    return SeedResult(UNIT_ID, created=len(missing), skipped=len(linked))


unit = SeedUnit(UNIT_ID, "admin role permission links", seed_admin_permissions)
