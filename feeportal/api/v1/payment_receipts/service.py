"""Payment receipt service: itemized fee lines and per-student money receipts for one payment."""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional

from feeportal.api.v1.receipts.service import format_receipt_date
from feeportal.core.amount_words import amount_in_words
from feeportal.core.config import settings
from feeportal.core.enums import ReceiptNumberMode
from feeportal.core.exceptions import FetchError
from feeportal.core.fee_api import FeeApiClient
from feeportal.core.schemas import Payment, StudentRecord, to_amount

from .receipt_number import generate_receipt_number, receipt_numbers
from .schemas import FeeLineItem, PaymentReceipt, ReceiptSheet

logger = logging.getLogger(__name__)

# (id, description) in printed order. Only the tuition line carries the payment amount.
FEE_CATALOGUE = (
    ("admission", "Admission & Registration Fee"),
    ("fund", "Development Fund"),
    ("institute", "Tuition Fee"),
    ("library", "Library Fee"),
    ("laboratory", "Laboratory Fee"),
    ("lab", "Computer Laboratory Fee"),
    ("game", "Game Fee"),
    ("cultural", "Cultural Fee"),
    ("prospectus", "Prospectus Fee & Admission Form"),
)
TUITION_FEE_ID = "institute"
TOTAL_LINE_ID = "--"

NO_STUDENTS_MESSAGE = "No students found for this standard."


def project_fee_lines(payment: Payment) -> List[FeeLineItem]:
    """Catalogue lines for a payment followed by a Total line summing them."""
    amount = to_amount(payment.amount, "amount", f"payment {payment.id or '?'}")
    lines = [
        FeeLineItem(
            id=fee_id,
            description=description,
            amount=amount if fee_id == TUITION_FEE_ID else Decimal("0"),
        )
        for fee_id, description in FEE_CATALOGUE
    ]
    total = sum((line.amount for line in lines), Decimal("0"))
    lines.append(FeeLineItem(id=TOTAL_LINE_ID, description="Total", amount=total))
    return lines


def filter_students_by_standard(
    students: Iterable[StudentRecord],
    standard: Optional[str] = None,
) -> List[StudentRecord]:
    if not standard:
        return list(students)
    return [s for s in students if (s.standard or "") == str(standard)]


def _receipt_number(payment_id: str, student: StudentRecord) -> str:
    if settings.receipt_number_mode == ReceiptNumberMode.PER_PAYMENT:
        return receipt_numbers.number_for(payment_id, student.roll_no, settings.receipt_number_prefix)
    return generate_receipt_number(settings.receipt_number_prefix)


def build_receipt_sheet(
    payment: Payment,
    students: Iterable[StudentRecord],
    standard: Optional[str] = None,
    payment_id: Optional[str] = None,
) -> ReceiptSheet:
    lines = project_fee_lines(payment)
    total = lines[-1].amount
    words = amount_in_words(total)
    pid = payment.id or payment_id or ""
    kept = filter_students_by_standard(students, standard)
    receipts = [
        PaymentReceipt(
            receipt_number=_receipt_number(pid, student),
            date=format_receipt_date(payment.date),
            student_name=student.name,
            roll_no=student.roll_no,
            course=settings.course_name,
            lines=lines,
            total=total,
            amount_in_words=words,
        )
        for student in kept
    ]
    return ReceiptSheet(
        payment_id=pid,
        standard=standard or None,
        students=kept,
        receipts=receipts,
        message=None if kept else NO_STUDENTS_MESSAGE,
    )


async def get_receipt_sheet(
    client: FeeApiClient,
    payment_id: str,
    standard: Optional[str] = None,
) -> ReceiptSheet:
    """Fetch the payment and the students. A failed student fetch leaves the sheet empty."""
    payment = await client.get_payment(payment_id)
    try:
        students = await client.list_students()
    except FetchError as e:
        logger.warning("Rendering payment %s receipts without students: %s", payment_id, e.message)
        sheet = build_receipt_sheet(payment, [], standard, payment_id=payment_id)
        sheet.message = e.message
        return sheet
    return build_receipt_sheet(payment, students, standard, payment_id=payment_id)
