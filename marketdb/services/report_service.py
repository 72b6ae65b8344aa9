# marketdb/services/report_service.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from marketdb.core.config import settings
from marketdb.core.logging import log_context
from marketdb.domain.enums import ReportStatus
from marketdb.models.report import ExportReport
from marketdb.models.user import User
from marketdb.schemas.report import ExportReportCreate
from marketdb.services.exceptions import ConflictError, ResourceNotFoundError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    # Las columnas DateTime del esquema son naive (UTC).
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _ensure_generating(report: ExportReport) -> None:
    if report.estado != ReportStatus.generating:
        raise ConflictError(
            f"Report {report.id} is in state {report.estado.value!r}; only 'generando' can transition."
        )


async def request_report(session: AsyncSession, usuario_id: uuid.UUID, data: ExportReportCreate) -> ExportReport:
    user = await session.get(User, usuario_id)
    if user is None:
        raise ResourceNotFoundError(f"User {usuario_id} not found.")

    report = ExportReport(
        usuario_id=usuario_id,
        tipo_reporte=data.tipo_reporte,
        formato=data.formato,
        parametros_filtro=data.parametros_filtro(),
        estado=ReportStatus.generating,
        solicitado_at=_utcnow(),
    )
    session.add(report)
    await session.flush()
    logger.info(
        "report.requested",
        extra=log_context(report_id=report.id, tipo=data.tipo_reporte.value, formato=data.formato.value),
    )
    return report


async def get_report(session: AsyncSession, report_id: int) -> ExportReport:
    report = await session.get(ExportReport, report_id)
    if report is None:
        raise ResourceNotFoundError(f"Export report {report_id} not found.")
    return report


async def list_user_reports(session: AsyncSession, usuario_id: uuid.UUID) -> List[ExportReport]:
    stmt = (
        select(ExportReport)
        .where(ExportReport.usuario_id == usuario_id)
        .order_by(ExportReport.solicitado_at.desc(), ExportReport.id.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def mark_completed(
    session: AsyncSession,
    report: ExportReport,
    nombre_archivo: str,
    url_descarga: str,
    *,
    now: datetime | None = None,
) -> ExportReport:
    _ensure_generating(report)
    completed_at = now or _utcnow()
    report.estado = ReportStatus.completed
    report.nombre_archivo = nombre_archivo
    report.url_descarga = url_descarga
    report.completado_at = completed_at
    report.expires_at = completed_at + timedelta(hours=settings.REPORT_EXPIRY_HOURS)
    await session.flush()
    logger.info("report.completed", extra=log_context(report_id=report.id, expires_at=report.expires_at))
    return report


async def mark_failed(session: AsyncSession, report: ExportReport, *, now: datetime | None = None) -> ExportReport:
    _ensure_generating(report)
    report.estado = ReportStatus.error
    report.completado_at = now or _utcnow()
    await session.flush()
    logger.warning("report.failed", extra=log_context(report_id=report.id))
    return report


async def purge_expired(session: AsyncSession, now: datetime | None = None) -> int:
    """Delete completed reports whose download has expired; return how many."""
    cutoff = now or _utcnow()
    stmt = (
        delete(ExportReport)
        .where(ExportReport.estado == ReportStatus.completed)
        .where(ExportReport.expires_at.is_not(None))
        .where(ExportReport.expires_at < cutoff)
        .execution_options(synchronize_session="fetch")
    )
    result = await session.execute(stmt)
    await session.flush()
    purged = result.rowcount or 0
    if purged:
        logger.info("report.purged", extra=log_context(count=purged))
    return purged
