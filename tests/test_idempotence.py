import sqlalchemy as sa

from marketdb.schema import build_registry
from marketdb.schema.units import v016_fix_permisos_unique_constraint as fix_unit


def test_existing_schema_with_empty_ledger_is_recorded(runner, sync_engine, ledger, snapshot):
    runner.upgrade()
    before = snapshot(sync_engine)
    with sync_engine.begin() as conn:
        ledger.table.drop(conn)

    applied = runner.upgrade()

    assert applied == build_registry().ids
    assert snapshot(sync_engine) == before
    with sync_engine.connect() as conn:
        assert ledger.get_applied(conn) == set(applied)


def test_partially_present_schema_completes(runner, sync_engine, ledger):
    runner.upgrade(target="010_create_contactos_table")
    with sync_engine.begin() as conn:
        # el ledger "pierde" las últimas unidades pero las tablas siguen ahí
        conn.execute(ledger.table.delete().where(ledger.table.c.name >= "005"))

    runner.upgrade()

    with sync_engine.connect() as conn:
        assert ledger.get_applied(conn) == set(build_registry().ids)


def test_permission_fix_replaces_legacy_single_column_unique(sync_engine):
    metadata = sa.MetaData()
    permisos = sa.Table(
        "PERMISOS",
        metadata,
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("accion", sa.String(100), nullable=False),
        sa.Column("recurso", sa.String(100), nullable=False),
    )
    sa.Index("accion", permisos.c.accion, unique=True)
    metadata.create_all(sync_engine)

    registry = build_registry()
    with sync_engine.begin() as conn:
        registry.apply(fix_unit.unit, conn)

    indexes = {ix["name"]: ix for ix in sa.inspect(sync_engine).get_indexes("PERMISOS")}
    assert "accion" not in indexes
    assert indexes[fix_unit.COMPOSITE_INDEX]["column_names"] == ["accion", "recurso"]

    # misma acción sobre recursos distintos ya no choca
    with sync_engine.begin() as conn:
        conn.execute(permisos.insert(), [{"accion": "leer", "recurso": "a"}, {"accion": "leer", "recurso": "b"}])

    # segunda aplicación: nada que hacer
    with sync_engine.begin() as conn:
        registry.apply(fix_unit.unit, conn)
    assert len(sa.inspect(sync_engine).get_indexes("PERMISOS")) == 1


def test_permission_fix_is_a_noop_on_fresh_schema(migrated_engine):
    indexes = {ix["name"] for ix in sa.inspect(migrated_engine).get_indexes("PERMISOS")}

    assert "uk_permisos_accion_recurso" in indexes
    assert fix_unit.COMPOSITE_INDEX not in indexes
