"""Receipts summary schemas."""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from feeportal.core.schemas import PaymentRecord


class StudentAggregate(BaseModel):
    """All receipts of one roll number with running totals."""

    roll_no: str
    name: Optional[str] = None
    standard: Optional[str] = None
    receipts: List[PaymentRecord] = Field(default_factory=list)
    total_fee: Decimal
    total_paid: Decimal = Decimal("0")
    dues_fee: Decimal


class StudentSummaryRow(BaseModel):
    """Flattened aggregate: one exported row per student."""

    roll_no: str
    name: Optional[str] = None
    total_fee: Decimal
    total_paid: Decimal
    dues_fee: Decimal
    receipt_details: str


SUMMARY_HEADERS = ("Roll No", "Name", "Total Fee", "Total Paid", "Dues Fee", "Receipt Details")
