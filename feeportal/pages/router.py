"""Server-rendered pages: student payment table and printable money receipts."""

from pathlib import Path
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from feeportal.api.v1.payment_receipts import service as payment_receipt_service
from feeportal.api.v1.receipts import service as receipt_service
from feeportal.core.config import settings
from feeportal.core.exceptions import ServiceError
from feeportal.core.fee_api import FeeApiClient, get_fee_api_client

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
STANDARDS = [str(n) for n in range(1, 11)]

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["pages"])


@router.get("/students/payments", response_class=HTMLResponse)
async def student_payments_page(
    request: Request,
    roll_number: Optional[str] = Query(None),
    client: FeeApiClient = Depends(get_fee_api_client),
):
    context = {"roll_number": roll_number or "", "students": [], "error": None}
    try:
        aggregates = await receipt_service.get_student_summaries(client, roll_number)
    except ServiceError as e:
        context["error"] = e.message
    else:
        context["students"] = [
            {"aggregate": agg, "lines": [receipt_service.format_receipt_line(r) for r in agg.receipts]}
            for agg in aggregates
        ]
    return templates.TemplateResponse(request, "student_payments.html", context)


@router.get("/payments/{payment_id}/receipt", response_class=HTMLResponse)
async def payment_receipt_page(
    request: Request,
    payment_id: str,
    standard: Optional[str] = Query(None),
    client: FeeApiClient = Depends(get_fee_api_client),
):
    selected = standard if standard in STANDARDS else None
    context = {
        "payment_id": payment_id,
        "payment_id_quoted": quote(payment_id, safe=""),
        "standards": STANDARDS,
        "selected_standard": selected or "",
        "sheet": None,
        "error": None,
        "settings": settings,
    }
    try:
        context["sheet"] = await payment_receipt_service.get_receipt_sheet(client, payment_id, selected)
    except ServiceError as e:
        context["error"] = e.message
    return templates.TemplateResponse(request, "payment_receipt.html", context)
