"""Records served by the remote fee API. Field aliases are the API's JSON keys."""

from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from feeportal.core.exceptions import MissingFieldError


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def to_amount(value: Optional[str], field: str, record: str) -> Decimal:
    """Decimal for a summed amount. Absent, blank, non-numeric or non-finite raises MissingFieldError."""
    if value is None or not value.strip():
        raise MissingFieldError(field, record)
    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        raise MissingFieldError(field, record)
    if not amount.is_finite():
        raise MissingFieldError(field, record)
    return amount


class PaymentRecord(BaseModel):
    """
    One receipt row from /api/receipts.

    Everything except totalAmount is display-only and kept as text. totalAmount
    is also kept as received; it is converted to Decimal only when summed, so a
    bad value fails just the records that are aggregated.
    """

    roll_no: Optional[str] = Field(None, alias="rollno")
    name: Optional[str] = None
    standard: Optional[str] = Field(None, alias="std")
    receipt_no: Optional[str] = Field(None, alias="receiptno")
    total_amount: Optional[str] = Field(None, alias="totalAmount")
    tuition_fee: Optional[str] = Field(None, alias="tuitionFee")
    admission_fee: Optional[str] = Field(None, alias="admissionfee")
    prospectus_fee: Optional[str] = Field(None, alias="prospectusFee")
    transport_fee: Optional[str] = Field(None, alias="transportFee")
    other_fee: Optional[str] = Field(None, alias="other")
    date: Optional[str] = None

    @field_validator(
        "roll_no", "name", "standard", "receipt_no", "total_amount", "tuition_fee",
        "admission_fee", "prospectus_fee", "transport_fee", "other_fee", "date",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, value: Any) -> Optional[str]:
        return _as_text(value)

    class Config:
        populate_by_name = True
        frozen = True


class StudentRecord(BaseModel):
    """One student from /api/students."""

    roll_no: Optional[str] = Field(None, alias="rollNo")
    name: Optional[str] = None
    standard: Optional[str] = None

    @field_validator("roll_no", "name", "standard", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Optional[str]:
        return _as_text(value)

    class Config:
        populate_by_name = True
        frozen = True


class Payment(BaseModel):
    """A single payment from /api/payments/{id}. amount stays text until projected."""

    id: Optional[str] = Field(None, alias="_id")
    amount: Optional[str] = None
    date: Optional[str] = None
    payment_details: List[Any] = Field(default_factory=list, alias="paymentDetails")

    @field_validator("id", "amount", "date", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Optional[str]:
        return _as_text(value)

    @field_validator("payment_details", mode="before")
    @classmethod
    def default_details(cls, value: Any) -> List[Any]:
        if value is None:
            return []
        return value if isinstance(value, list) else [value]

    class Config:
        populate_by_name = True
        frozen = True
