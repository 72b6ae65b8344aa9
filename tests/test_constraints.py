import uuid
from datetime import date

import pytest
import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from marketdb.domain.enums import BadgeType, CartStatus
from marketdb.models.badge import Badge, UserBadge
from marketdb.models.cart import Cart, CartItem
from marketdb.models.metrics import ProductMetric, SellerMetric
from marketdb.models.producer import Contact, ProducerProfile
from marketdb.models.user import User


def _new_cart(conn, usuario_id) -> int:
    return conn.execute(sa.insert(Cart.__table__).values(usuario_id=usuario_id, estado=CartStatus.active)).inserted_primary_key[0]


def test_duplicate_cart_item_is_rejected(migrated_engine, make_user, make_profile, make_category, make_product):
    user_id = make_user()
    product_id = make_product(make_profile(make_user()), make_category(), "tomate-perita")
    items = CartItem.__table__

    with migrated_engine.begin() as conn:
        cart_id = _new_cart(conn, user_id)
        conn.execute(sa.insert(items).values(carrito_id=cart_id, producto_id=product_id, cantidad=1, precio_unitario=10))

    with pytest.raises(IntegrityError):
        with migrated_engine.begin() as conn:
            conn.execute(
                sa.insert(items).values(carrito_id=cart_id, producto_id=product_id, cantidad=3, precio_unitario=10)
            )


def test_duplicate_daily_product_metric_is_rejected(
    migrated_engine, make_user, make_profile, make_category, make_product
):
    product_id = make_product(make_profile(make_user()), make_category(), "acelga")
    today = date(2024, 5, 1)

    with Session(migrated_engine) as session:
        session.add(ProductMetric(producto_id=product_id, fecha=today, vistas_diarias=4))
        session.commit()

        session.add(ProductMetric(producto_id=product_id, fecha=today, vistas_diarias=9))
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

        session.add(ProductMetric(producto_id=product_id, fecha=date(2024, 5, 2)))
        session.commit()
        assert session.scalar(sa.select(sa.func.count(ProductMetric.id))) == 2


def test_duplicate_daily_seller_metric_is_rejected(migrated_engine, make_user, make_profile):
    profile_id = uuid.UUID(make_profile(make_user()))
    today = date(2024, 5, 1)

    with Session(migrated_engine) as session:
        session.add(SellerMetric(perfil_productor_id=profile_id, fecha=today, vistas_perfil=2))
        session.commit()

        session.add(SellerMetric(perfil_productor_id=profile_id, fecha=today))
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

        stored = session.scalars(sa.select(SellerMetric)).one()
        assert stored.perfil_productor_id == profile_id
        assert stored.vistas_perfil == 2


def test_badge_cannot_be_granted_twice(migrated_engine, make_user):
    user_id = uuid.UUID(make_user())

    with Session(migrated_engine) as session:
        badge = Badge(
            nombre="Primer producto",
            descripcion="Publicaste tu primer producto",
            tipo=BadgeType.products,
            umbral_requerido=1,
        )
        session.add(badge)
        session.flush()
        session.add(UserBadge(usuario_id=user_id, insignia_id=badge.id))
        session.commit()

        session.add(UserBadge(usuario_id=user_id, insignia_id=badge.id, razon_otorgamiento="repetida"))
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

        assert session.scalar(sa.select(sa.func.count(UserBadge.id))) == 1


def test_cart_item_quantity_must_be_positive(migrated_engine, make_user, make_profile, make_category, make_product):
    product_id = make_product(make_profile(make_user()), make_category(), "zapallo")

    with pytest.raises(IntegrityError):
        with migrated_engine.begin() as conn:
            cart_id = _new_cart(conn, None)
            conn.execute(
                sa.insert(CartItem.__table__).values(
                    carrito_id=cart_id, producto_id=product_id, cantidad=0, precio_unitario=10
                )
            )


def test_deleting_user_cascades_profile_and_nulls_contacts(migrated_engine, make_user, make_profile):
    owner_id = make_user()
    visitor_id = make_user()
    profile_id = make_profile(owner_id)
    contacts = Contact.__table__

    with migrated_engine.begin() as conn:
        conn.execute(
            sa.insert(contacts).values(
                emprendedor_id=profile_id,
                usuario_id=visitor_id,
                nombre_contacto="Visitante",
                email_contacto="visitante@example.com",
                mensaje="¿Tienen envío?",
            )
        )
        cart_id = _new_cart(conn, visitor_id)

    with migrated_engine.begin() as conn:
        conn.execute(sa.delete(User.__table__).where(User.__table__.c.id == visitor_id))

    with migrated_engine.connect() as conn:
        contact = conn.execute(sa.select(contacts)).one()
        assert contact.usuario_id is None
        assert contact.emprendedor_id == uuid.UUID(profile_id)
        cart = conn.execute(sa.select(Cart.__table__).where(Cart.__table__.c.id == cart_id)).one()
        assert cart.usuario_id is None

    with migrated_engine.begin() as conn:
        conn.execute(sa.delete(User.__table__).where(User.__table__.c.id == owner_id))

    with migrated_engine.connect() as conn:
        assert conn.execute(sa.select(sa.func.count()).select_from(ProducerProfile.__table__)).scalar_one() == 0
        # el contacto pertenecía al perfil borrado
        assert conn.execute(sa.select(sa.func.count()).select_from(contacts)).scalar_one() == 0


def test_category_in_use_cannot_be_deleted(migrated_engine, make_user, make_profile, make_category, make_product):
    category_id = make_category("frutas")
    make_product(make_profile(make_user()), category_id, "manzana")

    with pytest.raises(IntegrityError):
        with migrated_engine.begin() as conn:
            conn.execute(sa.text("DELETE FROM CATEGORIAS WHERE id = :id"), {"id": category_id})


def test_review_rating_outside_range_is_rejected(migrated_engine, make_user, make_profile, make_category, make_product):
    user_id = make_user()
    product_id = make_product(make_profile(make_user()), make_category(), "miel")

    with pytest.raises(IntegrityError):
        with migrated_engine.begin() as conn:
            conn.execute(
                sa.text("INSERT INTO RESENIAS_PRODUCTO (usuario_id, producto_id, calificacion) VALUES (:u, :p, 6)"),
                {"u": user_id, "p": product_id},
            )


def test_product_type_is_a_closed_set(migrated_engine, make_user, make_profile, make_category, make_product):
    with pytest.raises(IntegrityError):
        make_product(make_profile(make_user()), make_category(), "raro", tipo="alquiler")


def test_permission_pair_is_unique(migrated_engine):
    with migrated_engine.begin() as conn:
        conn.execute(sa.text("INSERT INTO PERMISOS (accion, recurso) VALUES ('leer', 'productos')"))
        conn.execute(sa.text("INSERT INTO PERMISOS (accion, recurso) VALUES ('leer', 'pedidos')"))

    with pytest.raises(IntegrityError):
        with migrated_engine.begin() as conn:
            conn.execute(sa.text("INSERT INTO PERMISOS (accion, recurso) VALUES ('leer', 'productos')"))
