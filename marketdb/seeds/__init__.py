"""Reference-data seed units, in application order."""

from marketdb.seeds.loader import SeedLoader, SeedResult, SeedUnit

from . import admin_permissions, admin_user, badges, permissions, roles

SEED_UNITS: tuple[SeedUnit, ...] = (
    roles.unit,
    admin_user.unit,
    permissions.unit,
    admin_permissions.unit,
    badges.unit,
)

__all__ = ["SEED_UNITS", "SeedLoader", "SeedResult", "SeedUnit"]
