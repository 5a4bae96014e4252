"""
Rupee amounts in words, Indian numbering (thousand, lakh, crore).

Examples:
    4500      -> Rupees Four Thousand Five Hundred Only
    125000    -> Rupees One Lakh Twenty Five Thousand Only
    10.50     -> Rupees Ten and Fifty Paise Only
"""

import logging
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal

from num2words import num2words

logger = logging.getLogger(__name__)


def number_to_words(n: int) -> str:
    """Whole number in words, title case, without num2words' commas and hyphens."""
    words = num2words(n, lang="en_IN").replace(",", "").replace("-", " ")
    return " ".join(w if w == "and" else w.capitalize() for w in words.split())


def amount_in_words(amount: Decimal) -> str:
    amount = Decimal(amount)
    negative = amount < 0
    amount = abs(amount)
    rupee_part = amount.to_integral_value(rounding=ROUND_DOWN)
    paise = int(((amount - rupee_part) * 100).to_integral_value(rounding=ROUND_HALF_UP))
    rupees = int(rupee_part)
    if paise == 100:
        rupees, paise = rupees + 1, 0

    try:
        words = f"Rupees {number_to_words(rupees)}"
        if paise:
            words += f" and {number_to_words(paise)} Paise"
    except OverflowError:
        logger.warning("Amount %s too large to spell out; printing digits", amount)
        words = f"Rupees {rupees}" + (f".{paise:02d}" if paise else "")
    if negative:
        words = "Minus " + words
    return words + " Only"
