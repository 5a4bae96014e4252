import copy
from typing import AsyncGenerator, Dict, Tuple

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from feeportal.api.v1.payment_receipts.receipt_number import receipt_numbers
from feeportal.core.fee_api import FeeApiClient, get_fee_api_client
from feeportal.main import app


FEE_API_URL = "http://fee-api.test"

RECEIPTS = [
    {
        "rollno": "5",
        "name": "Asha Kumari",
        "std": "2",
        "receiptno": "R-101",
        "totalAmount": 3000,
        "tuitionFee": 2500,
        "admissionfee": 500,
        "prospectusFee": 0,
        "transportFee": 0,
        "other": 0,
        "date": "2024-04-15T00:00:00.000Z",
    },
    {
        "rollno": "5",
        "name": "Asha Kumari",
        "std": "2",
        "receiptno": "R-102",
        "totalAmount": 2000,
        "tuitionFee": 2000,
        "admissionfee": 0,
        "prospectusFee": 0,
        "transportFee": 0,
        "other": 0,
        "date": "2024-06-10T00:00:00.000Z",
    },
    {
        "rollno": "7",
        "name": "Bikash Oraon",
        "std": "3",
        "receiptno": "R-103",
        "totalAmount": 10000,
        "tuitionFee": 8000,
        "admissionfee": 1000,
        "prospectusFee": 200,
        "transportFee": 600,
        "other": 200,
        "date": "2024-05-02T00:00:00.000Z",
    },
]

STUDENTS = [
    {"rollNo": 5, "name": "Asha Kumari", "standard": 2},
    {"rollNo": 7, "name": "Bikash Oraon", "standard": 3},
    {"rollNo": 9, "name": "Chandan Mahto", "standard": 2},
]

PAYMENT = {"_id": "p1", "amount": 4500, "date": "2024-07-01T10:30:00.000Z", "paymentDetails": []}


def make_fee_api_client(routes: Dict[str, Tuple[int, object]]) -> FeeApiClient:
    """Fee API client answering from a {path: (status, body)} table. An exception body is raised."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path not in routes:
            return httpx.Response(404, json={"message": "Not found"})
        status_code, body = routes[request.url.path]
        if isinstance(body, Exception):
            raise body
        return httpx.Response(status_code, json=body)

    return FeeApiClient(FEE_API_URL, transport=httpx.MockTransport(handler))


@pytest.fixture()
def fee_api_routes() -> Dict[str, Tuple[int, object]]:
    """Routes of the fake fee API; tests edit this dict before calling the app."""
    return {
        "/api/receipts": (200, copy.deepcopy(RECEIPTS)),
        "/api/students": (200, copy.deepcopy(STUDENTS)),
        "/api/payments/p1": (200, copy.deepcopy(PAYMENT)),
    }


@pytest.fixture()
def fee_api(fee_api_routes) -> FeeApiClient:
    """Fake fee API client, also injected into the FastAPI app."""
    fee_client = make_fee_api_client(fee_api_routes)
    app.dependency_overrides[get_fee_api_client] = lambda: fee_client
    yield fee_client
    app.dependency_overrides.pop(get_fee_api_client, None)


@pytest.fixture()
async def client(fee_api: FeeApiClient) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture(autouse=True)
def reset_receipt_numbers():
    yield
    receipt_numbers.clear()
