"""Canonical, statically registered schema units in application order."""

from marketdb.schema.unit import SchemaUnit

from . import (
    v000_create_roles_table,
    v001_create_users_table,
    v002_create_categories_table,
    v003_create_producer_profiles_table,
    v004_create_products_table,
    v005_create_lotes_table,
    v006_create_producto_lotes_table,
    v007_create_imagenes_producto_table,
    v008_create_resenias_producto_table,
    v009_create_calificaciones_vendedor_table,
    v010_create_contactos_table,
    v011_create_carritos_table,
    v012_create_carrito_items_table,
    v013_create_pedidos_table,
    v014_create_pedido_items_table,
    v015_create_permisos_table,
    v016_fix_permisos_unique_constraint,
    v017_create_usuario_roles_table,
    v018_create_rol_permisos_table,
    v019_create_metricas_productos_table,
    v020_create_metricas_vendedor_table,
    v021_create_estadisticas_emprendedor_table,
    v022_create_export_reports_table,
    v023_create_insignias_tables,
)

UNITS: tuple[SchemaUnit, ...] = (
    v000_create_roles_table.unit,
    v001_create_users_table.unit,
    v002_create_categories_table.unit,
    v003_create_producer_profiles_table.unit,
    v004_create_products_table.unit,
    v005_create_lotes_table.unit,
    v006_create_producto_lotes_table.unit,
    v007_create_imagenes_producto_table.unit,
    v008_create_resenias_producto_table.unit,
    v009_create_calificaciones_vendedor_table.unit,
    v010_create_contactos_table.unit,
    v011_create_carritos_table.unit,
    v012_create_carrito_items_table.unit,
    v013_create_pedidos_table.unit,
    v014_create_pedido_items_table.unit,
    v015_create_permisos_table.unit,
    v016_fix_permisos_unique_constraint.unit,
    v017_create_usuario_roles_table.unit,
    v018_create_rol_permisos_table.unit,
    v019_create_metricas_productos_table.unit,
    v020_create_metricas_vendedor_table.unit,
    v021_create_estadisticas_emprendedor_table.unit,
    v022_create_export_reports_table.unit,
    v023_create_insignias_tables.unit,
)

__all__ = ["UNITS"]
