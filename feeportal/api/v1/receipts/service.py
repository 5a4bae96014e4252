"""Receipts service: group receipt rows by roll number into per-student totals and dues."""

from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from feeportal.core.config import settings
from feeportal.core.fee_api import FeeApiClient
from feeportal.core.schemas import PaymentRecord, to_amount

from .schemas import StudentAggregate, StudentSummaryRow


def aggregate_receipts(
    records: Iterable[PaymentRecord],
    roll_number: Optional[str] = None,
    total_fee: Optional[Decimal] = None,
) -> List[StudentAggregate]:
    """
    Group receipts by roll number, in first-appearance order.

    An empty roll_number keeps every record; otherwise only records whose roll
    number equals it as a string. Name and standard come from the first record
    of each roll number. dues_fee is not clamped and goes negative on overpayment.
    Raises MissingFieldError when a kept record has no numeric totalAmount;
    records outside the filter are never converted.
    """
    fee = settings.default_total_fee if total_fee is None else Decimal(total_fee)
    grouped: Dict[str, StudentAggregate] = {}
    for record in records:
        roll_no = record.roll_no or ""
        if roll_number and roll_no != roll_number:
            continue
        amount = to_amount(
            record.total_amount,
            "totalAmount",
            f"receipt {record.receipt_no or '?'} (roll no {roll_no})",
        )
        agg = grouped.get(roll_no)
        if agg is None:
            agg = StudentAggregate(
                roll_no=roll_no,
                name=record.name,
                standard=record.standard,
                total_fee=fee,
                dues_fee=fee,
            )
            grouped[roll_no] = agg
        agg.receipts.append(record)
        agg.total_paid += amount
        agg.dues_fee = agg.total_fee - agg.total_paid
    return list(grouped.values())


def format_receipt_date(value: Optional[str]) -> str:
    if not value:
        return "Invalid Date"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return "Invalid Date"
    return parsed.strftime("%d/%m/%Y")


def _show(value: Optional[str]) -> str:
    return value if value and value.strip() else "-"


def format_receipt_line(record: PaymentRecord) -> str:
    return (
        f"Receipt_No: {_show(record.receipt_no)}, Amount: {_show(record.total_amount)}, "
        f"Tui_Fee: {_show(record.tuition_fee)}, Add_Fee: {_show(record.admission_fee)}, "
        f"Pros:-{_show(record.prospectus_fee)}, Trans:-{_show(record.transport_fee)}, "
        f"Other:-{_show(record.other_fee)}, on {format_receipt_date(record.date)}"
    )


def to_summary_rows(aggregates: Iterable[StudentAggregate]) -> List[StudentSummaryRow]:
    return [
        StudentSummaryRow(
            roll_no=agg.roll_no,
            name=agg.name,
            total_fee=agg.total_fee,
            total_paid=agg.total_paid,
            dues_fee=agg.dues_fee,
            receipt_details="\n".join(format_receipt_line(r) for r in agg.receipts),
        )
        for agg in aggregates
    ]


async def get_student_summaries(
    client: FeeApiClient,
    roll_number: Optional[str] = None,
) -> List[StudentAggregate]:
    records = await client.list_receipts()
    return aggregate_receipts(records, roll_number=roll_number or None)
