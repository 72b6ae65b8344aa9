import uuid
from decimal import Decimal

import pytest
import sqlalchemy as sa
from sqlalchemy import func, select

from marketdb.models.producer import EntrepreneurStatistics
from marketdb.services import statistics_service
from marketdb.services.exceptions import ResourceNotFoundError


def _review(conn, user_id, product_id, rating, activa=True):
    conn.execute(
        sa.text(
            "INSERT INTO RESENIAS_PRODUCTO (usuario_id, producto_id, calificacion, activa) VALUES (:u, :p, :c, :a)"
        ),
        {"u": user_id, "p": product_id, "c": rating, "a": activa},
    )


def _seller_rating(conn, user_id, profile_id, rating):
    conn.execute(
        sa.text(
            "INSERT INTO CALIFICACIONES_VENDEDOR (usuario_id, perfil_productor_id, calificacion) VALUES (:u, :p, :c)"
        ),
        {"u": user_id, "p": profile_id, "c": rating},
    )


@pytest.fixture
def producer(migrated_engine, make_user, make_profile, make_category, make_product):
    buyer = make_user()
    profile_id = make_profile(make_user())
    category_id = make_category()
    tomate = make_product(profile_id, category_id, "tomate", vistas=10)
    make_product(profile_id, category_id, "lechuga", vistas=5)
    make_product(profile_id, category_id, "poda", tipo="servicio", vistas=1)

    with migrated_engine.begin() as conn:
        _review(conn, buyer, tomate, 5)
        _review(conn, buyer, tomate, 4)
        _review(conn, buyer, tomate, 4)
        _review(conn, buyer, tomate, 1, activa=False)
        _seller_rating(conn, buyer, profile_id, 5)
        _seller_rating(conn, buyer, profile_id, 5)
        conn.execute(
            sa.text(
                "INSERT INTO CONTACTOS (emprendedor_id, nombre_contacto, email_contacto, mensaje) "
                "VALUES (:p, 'Ana', 'ana@example.com', 'Hola')"
            ),
            {"p": profile_id},
        )
    return uuid.UUID(profile_id)


@pytest.mark.asyncio
async def test_refresh_computes_totals_and_averages(async_db_session, producer):
    stats = await statistics_service.refresh_statistics(async_db_session, producer)
    await async_db_session.commit()

    assert (stats.total_productos, stats.total_servicios) == (2, 1)
    assert stats.total_vistas == 16
    assert stats.total_contactos == 1
    # la reseña inactiva no cuenta: (5 + 4 + 4) / 3
    assert stats.rating_promedio_productos == Decimal("4.33")
    assert stats.total_valoraciones_productos == 3
    assert stats.rating_promedio_vendedor == Decimal("5.00")
    assert stats.total_valoraciones_vendedor == 2


@pytest.mark.asyncio
async def test_refresh_upserts_a_single_row(async_db_session, producer):
    await statistics_service.refresh_statistics(async_db_session, producer)
    await async_db_session.commit()
    await statistics_service.refresh_statistics(async_db_session, producer)
    await async_db_session.commit()

    count = (await async_db_session.execute(select(func.count(EntrepreneurStatistics.id)))).scalar_one()
    assert count == 1


@pytest.mark.asyncio
async def test_profile_without_activity_gets_zero_averages(async_db_session, make_user, make_profile):
    profile_id = uuid.UUID(make_profile(make_user()))

    stats = await statistics_service.refresh_statistics(async_db_session, profile_id)

    assert stats.rating_promedio_productos == Decimal("0.00")
    assert stats.rating_promedio_vendedor == Decimal("0.00")
    assert stats.total_productos == 0


@pytest.mark.asyncio
async def test_refresh_unknown_profile(async_db_session):
    with pytest.raises(ResourceNotFoundError):
        await statistics_service.refresh_statistics(async_db_session, uuid.uuid4())


@pytest.mark.parametrize(
    "raw, expected",
    [(None, "0.00"), (4.333333, "4.33"), (4.335, "4.34"), (7, "5.00"), (-1, "0.00"), (Decimal("2.5"), "2.50")],
)
def test_normalize_rating_stays_within_bounds(raw, expected):
    assert statistics_service.normalize_rating(raw) == Decimal(expected)


@pytest.mark.parametrize("value", ["5.01", "-0.01"])
def test_model_rejects_out_of_range_ratings(value):
    stats = EntrepreneurStatistics(perfil_productor_id=uuid.uuid4())
    with pytest.raises(ValueError):
        stats.rating_promedio_productos = Decimal(value)
    with pytest.raises(ValueError):
        stats.rating_promedio_vendedor = Decimal(value)


def test_database_rejects_out_of_range_ratings(migrated_engine, make_user, make_profile):
    profile_id = make_profile(make_user())

    with pytest.raises(sa.exc.IntegrityError):
        with migrated_engine.begin() as conn:
            conn.execute(
                sa.text(
                    "INSERT INTO ESTADISTICAS_EMPRENDEDOR (perfil_productor_id, rating_promedio_vendedor) "
                    "VALUES (:p, 5.5)"
                ),
                {"p": profile_id},
            )
