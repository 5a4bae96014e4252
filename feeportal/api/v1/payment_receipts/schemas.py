"""Payment receipt schemas."""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from feeportal.core.schemas import StudentRecord


class FeeLineItem(BaseModel):
    id: str
    description: str
    amount: Decimal


class PaymentReceipt(BaseModel):
    """Printable money receipt for one student."""

    receipt_number: str
    date: str
    student_name: Optional[str] = None
    roll_no: Optional[str] = None
    course: str
    lines: List[FeeLineItem]
    total: Decimal
    amount_in_words: str


class ReceiptSheet(BaseModel):
    """Receipts of one payment for every student kept by the standard filter."""

    payment_id: str
    standard: Optional[str] = None
    students: List[StudentRecord] = Field(default_factory=list)
    receipts: List[PaymentReceipt] = Field(default_factory=list)
    message: Optional[str] = None
