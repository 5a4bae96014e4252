"""Payment receipts router: fee-line receipts for one payment, JSON and printable PDF."""

from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from feeportal.core.exceptions import ServiceError
from feeportal.core.fee_api import FeeApiClient, get_fee_api_client

from .printing import build_receipts_pdf
from .schemas import ReceiptSheet
from . import service

router = APIRouter(prefix="/api/v1/payments", tags=["payment receipts"])


@router.get("/{payment_id}/receipt", response_model=ReceiptSheet)
async def get_payment_receipt(
    payment_id: str,
    standard: Optional[int] = Query(None, ge=1, le=10, description="Class 1-10; omit for all students"),
    client: FeeApiClient = Depends(get_fee_api_client),
) -> ReceiptSheet:
    try:
        return await service.get_receipt_sheet(
            client,
            payment_id,
            standard=str(standard) if standard is not None else None,
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{payment_id}/receipt/pdf")
async def print_payment_receipt(
    payment_id: str,
    standard: Optional[int] = Query(None, ge=1, le=10),
    client: FeeApiClient = Depends(get_fee_api_client),
) -> Response:
    """Money receipts as a PDF, one page per student."""
    try:
        sheet = await service.get_receipt_sheet(
            client,
            payment_id,
            standard=str(standard) if standard is not None else None,
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(
        content=build_receipts_pdf(sheet),
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=Payment_Receipt_{quote(sheet.payment_id or payment_id, safe='')}.pdf"},
    )
