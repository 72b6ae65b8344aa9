# marketdb/schemas/report.py
from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from marketdb.core.config import settings
from marketdb.domain.enums import ReportFormat, ReportStatus, ReportType

CALIFICACION_MIN = 1
CALIFICACION_MAX = 5
LIMITE_MIN = 1


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


class ReportFilters(BaseModel):
    """Optional filters of an exportable report.

    Out-of-range rating and limit values are clamped to the nearest bound;
    an inverted date range is an error.
    """

    categoria_id: Optional[int] = None
    fecha_desde: Optional[date] = None
    fecha_hasta: Optional[date] = None
    estado: Optional[str] = None
    calificacion_min: Optional[int] = None
    limite: int = Field(default_factory=lambda: settings.REPORT_DEFAULT_LIMIT)

    model_config = ConfigDict(extra="forbid")

    @field_validator("calificacion_min")
    @classmethod
    def clamp_calificacion(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return None
        return _clamp(value, CALIFICACION_MIN, CALIFICACION_MAX)

    @field_validator("limite", mode="before")
    @classmethod
    def clamp_limite(cls, value: Any) -> Any:
        # 0 / None equivalen a "sin límite explícito"
        if value is None or value == 0:
            return settings.REPORT_DEFAULT_LIMIT
        return value

    @field_validator("limite")
    @classmethod
    def clamp_limite_range(cls, value: int) -> int:
        return _clamp(value, LIMITE_MIN, settings.REPORT_MAX_LIMIT)

    @model_validator(mode="after")
    def check_date_range(self) -> "ReportFilters":
        if self.fecha_desde and self.fecha_hasta and self.fecha_desde > self.fecha_hasta:
            raise ValueError("fecha_desde must not be later than fecha_hasta")
        return self


class ExportReportCreate(BaseModel):
    tipo_reporte: ReportType
    formato: ReportFormat
    filtros: ReportFilters = Field(default_factory=ReportFilters)

    def parametros_filtro(self) -> str:
        """Filters serialized as stored in EXPORT_REPORTS.parametros_filtro."""
        return json.dumps(self.filtros.model_dump(mode="json", exclude_none=True), sort_keys=True)


class ExportReportRead(BaseModel):
    id: int
    usuario_id: UUID
    tipo_reporte: ReportType
    formato: ReportFormat
    estado: ReportStatus
    nombre_archivo: Optional[str] = None
    url_descarga: Optional[str] = None
    parametros_filtro: dict = Field(default_factory=dict)
    solicitado_at: datetime
    completado_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("parametros_filtro", mode="before")
    @classmethod
    def parse_parametros(cls, value: Any) -> Any:
        if value is None or value == "":
            return {}
        if isinstance(value, str):
            return json.loads(value)
        return value
