"""
Money receipt numbers.
Format: prefix + "-" + random number 0..9999, e.g. NNG-4821.
Display values only; never persisted and never checked for uniqueness.
"""

import secrets
from collections import OrderedDict
from typing import Optional, Tuple

from feeportal.core.config import settings


def generate_receipt_number(prefix: str = "NNG") -> str:
    """New number on every call; two renders of the same payment differ."""
    return f"{prefix}-{secrets.randbelow(10000)}"


class ReceiptNumberRegistry:
    """
    In-process memo so one payment/student pair keeps its number until restart.
    Holds at most max_entries pairs; the least recently used pair is dropped first
    and gets a fresh number if it is asked for again.
    """

    def __init__(self, max_entries: int = 10000) -> None:
        self.max_entries = max_entries
        self._numbers: "OrderedDict[Tuple[str, str], str]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._numbers)

    def number_for(self, payment_id: str, roll_no: Optional[str], prefix: str = "NNG") -> str:
        key = (payment_id, roll_no or "")
        number = self._numbers.get(key)
        if number is not None:
            self._numbers.move_to_end(key)
            return number
        number = generate_receipt_number(prefix)
        self._numbers[key] = number
        while len(self._numbers) > self.max_entries:
            self._numbers.popitem(last=False)
        return number

    def clear(self) -> None:
        self._numbers.clear()


receipt_numbers = ReceiptNumberRegistry(settings.receipt_number_cache_size)
