import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from caterhub.db import get_db
from caterhub.schemas.reports import FinancialReport, ReportFilter, TipTransaction
from caterhub.services.exports import financial_report_csv, render_financial_report, report_filename
from caterhub.services.reporting import build_financial_report, build_tip_transactions
from caterhub.utils.date_ranges import ReportPeriod

log = logging.getLogger(__name__)
router = APIRouter()


def report_filter_params(
    period: ReportPeriod = ReportPeriod.LAST_7_DAYS,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
    customer_id: Optional[str] = None,
    menu_item_id: Optional[str] = None,
) -> ReportFilter:
    return ReportFilter(
        period=period,
        custom_start=custom_start,
        custom_end=custom_end,
        customer_id=customer_id,
        menu_item_id=menu_item_id,
    )


async def _report(db: AsyncSession, report_filter: ReportFilter) -> FinancialReport:
    try:
        return await build_financial_report(db, report_filter)
    except ValueError as e:
        log.warning("financial report rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/financial", response_model=FinancialReport)
async def financial_report(
    report_filter: ReportFilter = Depends(report_filter_params),
    db: AsyncSession = Depends(get_db),
):
    return await _report(db, report_filter)


@router.get("/financial/export.csv")
async def export_financial_csv(
    report_filter: ReportFilter = Depends(report_filter_params),
    db: AsyncSession = Depends(get_db),
):
    report = await _report(db, report_filter)
    return Response(
        content=financial_report_csv(report),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(report, "csv")}"'},
    )


@router.get("/financial/export.html", response_class=HTMLResponse)
async def export_financial_html(
    report_filter: ReportFilter = Depends(report_filter_params),
    db: AsyncSession = Depends(get_db),
):
    report = await _report(db, report_filter)
    return HTMLResponse(render_financial_report(report))


@router.get("/tips", response_model=List[TipTransaction])
async def tip_transactions(
    report_filter: ReportFilter = Depends(report_filter_params),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await build_tip_transactions(db, report_filter)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
