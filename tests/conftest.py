# tests/conftest.py
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import os
import uuid

import pytest
import pytest_asyncio
import sqlalchemy as sa

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_marketdb.db")
os.environ.setdefault("ASYNC_DATABASE_URL", "sqlite+aiosqlite:///./test_marketdb.db")

from marketdb.core.security import get_password_hash
from marketdb.db.session import make_engine
from marketdb.db.session_async import make_async_engine, make_session_factory
from marketdb.schema import MigrationLedger, MigrationRunner, build_registry
from marketdb.seeds import SeedLoader


def _schema_snapshot(engine) -> dict:
    """Tablas, columnas, índices y FKs tal como los ve el inspector."""
    insp = sa.inspect(engine)
    snapshot = {}
    for table in sorted(insp.get_table_names()):
        snapshot[table] = {
            "columns": [(c["name"], str(c["type"]), c["nullable"]) for c in insp.get_columns(table)],
            "indexes": sorted((ix["name"], tuple(ix["column_names"]), bool(ix.get("unique"))) for ix in insp.get_indexes(table)),
            "fks": sorted(
                (fk["referred_table"], tuple(fk["constrained_columns"]), tuple(fk["referred_columns"]))
                for fk in insp.get_foreign_keys(table)
            ),
        }
    return snapshot


# ---------- Fixtures ----------
@pytest.fixture(scope="session")
def snapshot():
    return _schema_snapshot


@pytest.fixture(scope="function")
def db_path(tmp_path) -> Path:
    return tmp_path / "marketdb.db"


@pytest.fixture(scope="function")
def sync_engine(db_path):
    """Engine sync sobre un archivo SQLite nuevo por test."""
    engine = make_engine(f"sqlite:///{db_path}")
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def ledger() -> MigrationLedger:
    return MigrationLedger("SequelizeMeta")


@pytest.fixture(scope="function")
def runner(sync_engine, ledger) -> MigrationRunner:
    return MigrationRunner(sync_engine, build_registry(), ledger)


@pytest.fixture(scope="function")
def migrated_engine(sync_engine, runner):
    """Engine sobre una base con todas las unidades aplicadas."""
    runner.upgrade()
    return sync_engine


@pytest_asyncio.fixture(scope="function")
async def async_engine(db_path, migrated_engine):
    engine = make_async_engine(f"sqlite+aiosqlite:///{db_path}")
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(async_engine):
    return make_session_factory(async_engine)


@pytest_asyncio.fixture(scope="function")
async def async_db_session(session_factory):
    """Provee una AsyncSession sobre la base migrada."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture(scope="function")
def seed_loader(session_factory) -> SeedLoader:
    return SeedLoader(session_factory)


# ---------- Datos de ejemplo (Core, sobre el engine sync) ----------
@pytest.fixture(scope="function")
def make_user(migrated_engine):
    def _make(email: str | None = None, role_id: str | None = None) -> str:
        user_id = str(uuid.uuid4())
        with migrated_engine.begin() as conn:
            conn.execute(
                sa.text(
                    'INSERT INTO users (id, email, password, "roleId", "isActive", "forcePasswordChange", '
                    '"failedLoginAttempts") VALUES (:id, :email, :pw, :role, 1, 0, 0)'
                ),
                {
                    "id": user_id,
                    "email": email or f"user-{user_id[:8]}@example.com",
                    "pw": get_password_hash("User1234"),
                    "role": role_id,
                },
            )
        return user_id

    return _make


@pytest.fixture(scope="function")
def make_profile(migrated_engine):
    def _make(usuario_id: str) -> str:
        profile_id = str(uuid.uuid4())
        with migrated_engine.begin() as conn:
            conn.execute(
                sa.text(
                    "INSERT INTO PERFIL_PRODUCTOR (id, usuario_id, nombre_negocio, ubicacion) "
                    "VALUES (:id, :uid, :nombre, :ubicacion)"
                ),
                {"id": profile_id, "uid": usuario_id, "nombre": "Huerta Sur", "ubicacion": "Mendoza"},
            )
        return profile_id

    return _make


@pytest.fixture(scope="function")
def make_category(migrated_engine):
    def _make(slug: str = "verduras") -> int:
        with migrated_engine.begin() as conn:
            result = conn.execute(
                sa.text("INSERT INTO CATEGORIAS (nombre, slug) VALUES (:nombre, :slug)"),
                {"nombre": slug.title(), "slug": slug},
            )
            return result.lastrowid

    return _make


@pytest.fixture(scope="function")
def make_product(migrated_engine):
    def _make(profile_id: str, categoria_id: int, slug: str, tipo: str = "producto", vistas: int = 0) -> int:
        with migrated_engine.begin() as conn:
            result = conn.execute(
                sa.text(
                    "INSERT INTO PRODUCTOS (perfil_productor_id, categoria_id, tipo, nombre, descripcion, "
                    "precio, unidad, slug, vistas) VALUES (:pid, :cid, :tipo, :nombre, 'desc', 10.50, 'kg', :slug, :vistas)"
                ),
                {"pid": profile_id, "cid": categoria_id, "tipo": tipo, "nombre": slug, "slug": slug, "vistas": vistas},
            )
            return result.lastrowid

    return _make
