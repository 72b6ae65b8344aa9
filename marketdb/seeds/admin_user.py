"""Initial administrator account, configured through ADMIN_* settings."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketdb.core.config import Settings, settings as default_settings
from marketdb.core.logging import log_context
from marketdb.core.security import get_password_hash
from marketdb.models.user import User
from marketdb.schema.exceptions import OrderingViolation
from marketdb.seeds.loader import SeedResult, SeedUnit
from marketdb.seeds.roles import ADMIN_ROLE, get_role

logger = logging.getLogger(__name__)

UNIT_ID = "001_admin_user"


async def seed_admin_user(session: AsyncSession, config: Settings | None = None) -> SeedResult:
    config = config or default_settings

    admin_role = await get_role(session, ADMIN_ROLE)
    if admin_role is None:
        raise OrderingViolation(
            UNIT_ID,
            (f"roles.nombre={ADMIN_ROLE}",),
            "Admin role not found. Run the roles seed unit first.",
        )

    if not config.admin_seed_enabled:
        logger.info("Skipping admin user: ADMIN_EMAIL or ADMIN_INITIAL_PASSWORD is not set.")
        return SeedResult(UNIT_ID, skipped=1)

    email = str(config.ADMIN_EMAIL).lower()
    result = await session.execute(select(User.id).where(User.email == email))
    if result.scalar_one_or_none() is not None:
        logger.info("Admin user already exists, skipping", extra=log_context(email=email))
        return SeedResult(UNIT_ID, skipped=1)

    user = User(
        email=email,
        password=get_password_hash(config.ADMIN_INITIAL_PASSWORD),
        first_name=config.ADMIN_FIRST_NAME,
        last_name=config.ADMIN_LAST_NAME,
        role_id=admin_role.id,
        is_active=True,
        force_password_change=config.ADMIN_FORCE_PASSWORD_CHANGE,
        last_password_change=datetime.now(timezone.utc).replace(tzinfo=None),
        failed_login_attempts=0,
    )
    session.add(user)
    await session.flush()
    logger.info("Admin user created", extra=log_context(user_id=str(user.id), email=email))
    return SeedResult(UNIT_ID, created=1)


unit = SeedUnit(UNIT_ID, "initial admin user", seed_admin_user)
