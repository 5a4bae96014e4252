from enum import Enum


class ReceiptNumberMode(str, Enum):
    RANDOM = "random"
    PER_PAYMENT = "per_payment"
