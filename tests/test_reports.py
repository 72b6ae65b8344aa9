import json
import uuid
from datetime import date, datetime, timedelta

import pytest
from pydantic import ValidationError
from sqlalchemy import func, select

from marketdb.domain.enums import ReportFormat, ReportStatus, ReportType
from marketdb.models.report import ExportReport
from marketdb.schemas.report import ExportReportCreate, ExportReportRead, ReportFilters
from marketdb.services import report_service
from marketdb.services.exceptions import ConflictError, ResourceNotFoundError


def test_filters_defaults():
    filters = ReportFilters()
    assert filters.limite == 1000
    assert filters.calificacion_min is None


@pytest.mark.parametrize("raw, expected", [(0, 1), (1, 1), (3, 3), (5, 5), (9, 5), (-2, 1)])
def test_filters_clamp_min_rating(raw, expected):
    assert ReportFilters(calificacion_min=raw).calificacion_min == expected


@pytest.mark.parametrize("raw, expected", [(None, 1000), (0, 1000), (-5, 1), (50, 50), (10000, 10000), (999999, 10000)])
def test_filters_clamp_limit(raw, expected):
    assert ReportFilters(limite=raw).limite == expected


def test_filters_reject_inverted_date_range():
    with pytest.raises(ValidationError):
        ReportFilters(fecha_desde=date(2024, 5, 2), fecha_hasta=date(2024, 5, 1))

    same_day = ReportFilters(fecha_desde=date(2024, 5, 1), fecha_hasta=date(2024, 5, 1))
    assert same_day.fecha_desde == same_day.fecha_hasta


def test_create_rejects_unknown_type_and_format():
    with pytest.raises(ValidationError):
        ExportReportCreate(tipo_reporte="ventas", formato="csv")
    with pytest.raises(ValidationError):
        ExportReportCreate(tipo_reporte="productos", formato="docx")


def test_create_serializes_filters_as_json():
    data = ExportReportCreate(
        tipo_reporte="valoraciones",
        formato="excel",
        filtros={"categoria_id": 3, "fecha_desde": "2024-01-01", "calificacion_min": 9},
    )

    assert data.tipo_reporte is ReportType.ratings
    assert json.loads(data.parametros_filtro()) == {
        "categoria_id": 3,
        "fecha_desde": "2024-01-01",
        "calificacion_min": 5,
        "limite": 1000,
    }


@pytest.fixture
def owner_id(make_user) -> uuid.UUID:
    return uuid.UUID(make_user())


async def _request(session, owner_id) -> ExportReport:
    data = ExportReportCreate(tipo_reporte=ReportType.products, formato=ReportFormat.csv)
    report = await report_service.request_report(session, owner_id, data)
    await session.commit()
    return report


@pytest.mark.asyncio
async def test_request_starts_in_generating(async_db_session, owner_id):
    report = await _request(async_db_session, owner_id)

    assert report.estado is ReportStatus.generating
    assert report.completado_at is None
    assert report.filters == {"limite": 1000}
    read = ExportReportRead.model_validate(report)
    assert read.parametros_filtro == {"limite": 1000}


@pytest.mark.asyncio
async def test_request_for_unknown_user(async_db_session):
    data = ExportReportCreate(tipo_reporte="productos", formato="pdf")
    with pytest.raises(ResourceNotFoundError):
        await report_service.request_report(async_db_session, uuid.uuid4(), data)


@pytest.mark.asyncio
async def test_completion_sets_expiry(async_db_session, owner_id):
    report = await _request(async_db_session, owner_id)
    now = datetime(2024, 6, 1, 12, 0, 0)

    await report_service.mark_completed(async_db_session, report, "productos.csv", "/downloads/productos.csv", now=now)
    await async_db_session.commit()

    stored = await report_service.get_report(async_db_session, report.id)
    assert stored.estado is ReportStatus.completed
    assert stored.completado_at == now
    assert stored.expires_at == now + timedelta(hours=24)
    assert stored.url_descarga == "/downloads/productos.csv"


@pytest.mark.asyncio
async def test_only_generating_reports_transition(async_db_session, owner_id):
    report = await _request(async_db_session, owner_id)
    await report_service.mark_failed(async_db_session, report)
    assert report.estado is ReportStatus.error

    with pytest.raises(ConflictError):
        await report_service.mark_completed(async_db_session, report, "x.csv", "/x.csv")
    with pytest.raises(ConflictError):
        await report_service.mark_failed(async_db_session, report)


@pytest.mark.asyncio
async def test_purge_expired_removes_only_expired_completed(async_db_session, owner_id):
    now = datetime(2024, 6, 2, 12, 0, 0)
    old = await _request(async_db_session, owner_id)
    fresh = await _request(async_db_session, owner_id)
    pending = await _request(async_db_session, owner_id)
    await report_service.mark_completed(async_db_session, old, "a.csv", "/a.csv", now=now - timedelta(hours=30))
    await report_service.mark_completed(async_db_session, fresh, "b.csv", "/b.csv", now=now - timedelta(hours=1))
    await async_db_session.commit()

    purged = await report_service.purge_expired(async_db_session, now)
    await async_db_session.commit()

    assert purged == 1
    remaining = (await async_db_session.execute(select(ExportReport.id).order_by(ExportReport.id))).scalars().all()
    assert remaining == [fresh.id, pending.id]
    assert (await async_db_session.execute(select(func.count(ExportReport.id)))).scalar_one() == 2


@pytest.mark.asyncio
async def test_list_user_reports(async_db_session, owner_id):
    first = await _request(async_db_session, owner_id)
    second = await _request(async_db_session, owner_id)

    reports = await report_service.list_user_reports(async_db_session, owner_id)

    assert {r.id for r in reports} == {first.id, second.id}
