"""Async client for the remote fee API (payments, students, receipts)."""

import logging
from typing import Any, List, Optional
from urllib.parse import quote

import httpx
from fastapi import status
from pydantic import TypeAdapter, ValidationError

from feeportal.core.config import settings
from feeportal.core.exceptions import FetchError, ServiceError
from feeportal.core.schemas import Payment, PaymentRecord, StudentRecord

logger = logging.getLogger(__name__)

_payment_records = TypeAdapter(List[PaymentRecord])
_student_records = TypeAdapter(List[StudentRecord])


class FeeApiClient:
    """Read-only access to the fee backend. One short-lived httpx client per call."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _get_json(self, path: str, what: str) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.get(path)
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching %s from %s%s: %s", what, self.base_url, path, e)
            raise FetchError(what) from e

    async def list_receipts(self) -> List[PaymentRecord]:
        data = await self._get_json("/api/receipts", "receipts")
        try:
            return _payment_records.validate_python(data)
        except ValidationError as e:
            logger.error("Malformed receipts payload: %s", e)
            raise FetchError("receipts") from e

    async def list_students(self) -> List[StudentRecord]:
        data = await self._get_json("/api/students", "student data")
        try:
            return _student_records.validate_python(data)
        except ValidationError as e:
            logger.error("Malformed students payload: %s", e)
            raise FetchError("student data") from e

    async def get_payment(self, payment_id: str) -> Payment:
        if payment_id.strip(".") == "":
            raise ServiceError("Invalid payment id", status.HTTP_400_BAD_REQUEST)
        data = await self._get_json(f"/api/payments/{quote(payment_id, safe='')}", "payment details")
        try:
            return Payment.model_validate(data)
        except ValidationError as e:
            logger.error("Malformed payment %s payload: %s", payment_id, e)
            raise FetchError("payment details") from e


def get_fee_api_client() -> FeeApiClient:
    return FeeApiClient(settings.fee_api_base_url, timeout=settings.fee_api_timeout_seconds)
