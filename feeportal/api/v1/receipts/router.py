"""Receipts router: per-student payment summary as JSON, Excel and PDF."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from feeportal.core.exceptions import ServiceError
from feeportal.core.fee_api import FeeApiClient, get_fee_api_client

from .exports import EXCEL_FILENAME, PDF_FILENAME, build_summary_pdf, build_summary_workbook
from .schemas import StudentAggregate
from . import service

router = APIRouter(prefix="/api/v1/receipts", tags=["receipts"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/summary", response_model=List[StudentAggregate])
async def get_student_summary(
    roll_number: Optional[str] = Query(None, description="Exact roll number; empty returns every student"),
    client: FeeApiClient = Depends(get_fee_api_client),
) -> List[StudentAggregate]:
    try:
        return await service.get_student_summaries(client, roll_number)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/summary/excel")
async def export_student_summary_excel(
    roll_number: Optional[str] = Query(None),
    client: FeeApiClient = Depends(get_fee_api_client),
) -> Response:
    """Download the summary as Student_Receipts.xlsx."""
    try:
        aggregates = await service.get_student_summaries(client, roll_number)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    content = build_summary_workbook(service.to_summary_rows(aggregates))
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={EXCEL_FILENAME}"},
    )


@router.get("/summary/pdf")
async def export_student_summary_pdf(
    roll_number: Optional[str] = Query(None),
    client: FeeApiClient = Depends(get_fee_api_client),
) -> Response:
    """Download the summary as Student_Receipts.pdf."""
    try:
        aggregates = await service.get_student_summaries(client, roll_number)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    content = build_summary_pdf(service.to_summary_rows(aggregates))
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={PDF_FILENAME}"},
    )
