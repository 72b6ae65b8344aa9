# marketdb/domain/enums.py
# Los valores son los literales persistidos por el esquema original (en español).
import enum


class ProductType(str, enum.Enum):
    product = "producto"
    service = "servicio"


class LotStatus(str, enum.Enum):
    active = "activo"
    depleted = "agotado"
    expired = "vencido"


class ContactStatus(str, enum.Enum):
    new = "nuevo"
    read = "leido"
    replied = "respondido"
    closed = "cerrado"


class CartStatus(str, enum.Enum):
    active = "activo"
    pending = "pendiente"
    completed = "completado"
    cancelled = "cancelado"


class OrderStatus(str, enum.Enum):
    pending = "pendiente"
    confirmed = "confirmado"
    shipped = "enviado"
    delivered = "entregado"
    cancelled = "cancelado"


class ReportType(str, enum.Enum):
    products = "productos"
    metrics = "metricas"
    ratings = "valoraciones"
    contacts = "contactos"


class ReportFormat(str, enum.Enum):
    csv = "csv"
    pdf = "pdf"
    excel = "excel"


class ReportStatus(str, enum.Enum):
    generating = "generando"
    completed = "completado"
    error = "error"


class BadgeType(str, enum.Enum):
    products = "productos"
    ratings = "valoraciones"
    sales = "ventas"
