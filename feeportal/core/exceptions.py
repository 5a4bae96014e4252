from typing import Optional

from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class FetchError(ServiceError):
    """The remote fee API could not be reached or returned something unusable."""

    def __init__(self, what: str) -> None:
        super().__init__(
            f"Failed to fetch {what}. Please try again later.",
            status.HTTP_502_BAD_GATEWAY,
        )
        self.what = what


class MissingFieldError(ServiceError):
    """An amount needed for a total is absent or not a number on a fetched record."""

    def __init__(self, field: str, record: Optional[str] = None) -> None:
        where = f" on {record}" if record else ""
        super().__init__(
            f"Missing or non-numeric field '{field}'{where}",
            status.HTTP_422_UNPROCESSABLE_ENTITY,
        )
        self.field = field
        self.record = record
