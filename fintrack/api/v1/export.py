"""
Export API endpoint (PDF report)
"""
import logging
from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from fpdf.errors import FPDFException
from sqlalchemy.orm import Session

from fintrack.api.deps import Identity, get_current_identity, get_db, get_today
from fintrack.application.export import ExportService, resolve_period
from fintrack.application.pdf_report import render_pdf
from fintrack.application.users import ProfileService
from fintrack.domain.errors import InternalError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/export", tags=["export"])


@router.get("/pdf")
def export_pdf(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """Income & expense report for [start_date, end_date] (default: last month)"""
    start, end = resolve_period(start_date, end_date, today)

    user = ProfileService(db).get_profile(identity.user_id)
    report = ExportService(db).build_report(identity.user_id, start, end)
    try:
        content = render_pdf(report, currency=user.currency)
    except FPDFException as e:
        raise InternalError(f"pdf rendering failed: {e}") from e

    logger.info(
        "Exported report user_id=%s period=%s..%s rows=%d",
        identity.user_id, start, end, len(report.income) + len(report.expense),
    )

    filename = f"report_{start.isoformat()}_to_{end.isoformat()}.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
