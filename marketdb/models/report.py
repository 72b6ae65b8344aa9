# marketdb/models/report.py
from __future__ import annotations

import json
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from marketdb.db.session import Base
from marketdb.db.types import GUID, StoredEnum
from marketdb.domain.enums import ReportFormat, ReportStatus, ReportType


class ExportReport(Base):
    __tablename__ = "EXPORT_REPORTS"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    usuario_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    tipo_reporte: Mapped[ReportType] = mapped_column(StoredEnum(ReportType, "export_reports_tipo"), nullable=False)
    formato: Mapped[ReportFormat] = mapped_column(StoredEnum(ReportFormat, "export_reports_formato"), nullable=False)
    parametros_filtro: Mapped[str | None] = mapped_column(Text, nullable=True)
    nombre_archivo: Mapped[str | None] = mapped_column(String(255), nullable=True)
    url_descarga: Mapped[str | None] = mapped_column(String(500), nullable=True)
    estado: Mapped[ReportStatus] = mapped_column(
        StoredEnum(ReportStatus, "export_reports_estado"), default=ReportStatus.generating, nullable=False
    )
    solicitado_at = mapped_column(DateTime, server_default=func.now(), nullable=False)
    completado_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    @property
    def filters(self) -> dict[str, Any]:
        if not self.parametros_filtro:
            return {}
        return json.loads(self.parametros_filtro)
