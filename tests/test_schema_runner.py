import sqlalchemy as sa

import pytest

from marketdb.schema import MigrationLedger, MigrationRunner, build_registry


def test_upgrade_applies_every_unit_in_order(runner, sync_engine, ledger):
    applied = runner.upgrade()

    registry = build_registry()
    assert applied == registry.ids
    with sync_engine.connect() as conn:
        assert ledger.get_applied(conn) == set(registry.ids)


def test_every_foreign_key_target_exists(migrated_engine):
    insp = sa.inspect(migrated_engine)
    tables = set(insp.get_table_names())
    for table in tables:
        for fk in insp.get_foreign_keys(table):
            assert fk["referred_table"] in tables, (table, fk)
            target_columns = {c["name"] for c in insp.get_columns(fk["referred_table"])}
            assert set(fk["referred_columns"]) <= target_columns, (table, fk)


def test_expected_tables_exist(migrated_engine):
    tables = set(sa.inspect(migrated_engine).get_table_names())
    assert {
        "roles", "users", "CATEGORIAS", "PERFIL_PRODUCTOR", "PRODUCTOS", "LOTES", "PRODUCTO_LOTES",
        "IMAGENES_PRODUCTO", "RESENIAS_PRODUCTO", "CALIFICACIONES_VENDEDOR", "CONTACTOS", "CARRITOS",
        "CARRITO_ITEMS", "PEDIDOS", "PEDIDO_ITEMS", "PERMISOS", "USUARIO_ROLES", "ROL_PERMISOS",
        "METRICAS_PRODUCTOS", "METRICAS_VENDEDOR", "ESTADISTICAS_EMPRENDEDOR", "EXPORT_REPORTS",
        "INSIGNIAS", "USUARIO_INSIGNIAS", "SequelizeMeta",
    } <= tables


def test_second_run_is_a_noop(runner, sync_engine, snapshot):
    runner.upgrade()
    before = snapshot(sync_engine)

    assert runner.upgrade() == []
    assert snapshot(sync_engine) == before


def test_upgrade_to_target_stops_there(runner, sync_engine):
    applied = runner.upgrade(target="003_create_producer_profiles_table")

    assert applied[-1] == "003_create_producer_profiles_table"
    assert len(applied) == 4
    tables = set(sa.inspect(sync_engine).get_table_names())
    assert "PERFIL_PRODUCTOR" in tables
    assert "PRODUCTOS" not in tables


def test_status_reports_applied_units(runner):
    runner.upgrade(target="001_create_users_table")
    status = {s.id: s.applied for s in runner.status()}

    assert status["000_create_roles_table"] is True
    assert status["001_create_users_table"] is True
    assert status["002_create_categories_table"] is False


def test_downgrade_reverts_and_forgets(runner, sync_engine, ledger):
    runner.upgrade()

    reverted = runner.downgrade(steps=2)

    assert reverted == ["023_create_insignias_tables", "022_create_export_reports_table"]
    tables = set(sa.inspect(sync_engine).get_table_names())
    assert not {"INSIGNIAS", "USUARIO_INSIGNIAS", "EXPORT_REPORTS"} & tables
    with sync_engine.connect() as conn:
        applied = ledger.get_applied(conn)
    assert "022_create_export_reports_table" not in applied
    assert "021_create_estadisticas_emprendedor_table" in applied

    # y se puede volver a aplicar
    assert runner.upgrade() == ["022_create_export_reports_table", "023_create_insignias_tables"]


def test_full_downgrade_leaves_only_the_ledger(runner, sync_engine):
    runner.upgrade()
    runner.downgrade(steps=len(build_registry()))

    assert sa.inspect(sync_engine).get_table_names() == ["SequelizeMeta"]


def test_downgrade_requires_positive_steps(runner):
    with pytest.raises(ValueError):
        runner.downgrade(steps=0)


def test_ledger_table_name_is_configurable(sync_engine):
    runner = MigrationRunner(sync_engine, build_registry(), MigrationLedger("schema_units"))
    runner.upgrade(target="000_create_roles_table")

    tables = set(sa.inspect(sync_engine).get_table_names())
    assert "schema_units" in tables
    assert "SequelizeMeta" not in tables
