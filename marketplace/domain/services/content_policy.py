"""
Content policies applied to outgoing chat messages.

While an order is still open, clients and specialists must not trade
contact details. The default policy looks for phone-number-like digit runs.
"""

import re
from abc import ABC, abstractmethod

from marketplace.domain.value_objects import OrderStatus

# Digits joined by spaces, dashes, dots or parentheses, optional leading "+"
_CANDIDATE = re.compile(r"\+?\(?\d[\d\s\-.()]*\d")
_DIGIT_GROUP = re.compile(r"\d+")


class ContentPolicy(ABC):
    @abstractmethod
    def is_violation(self, text: str, order_status: OrderStatus | None) -> bool: ...


class AllowAllPolicy(ContentPolicy):
    def is_violation(self, text: str, order_status: OrderStatus | None) -> bool:
        return False


class PhoneNumberPolicy(ContentPolicy):
    """
    Flags text containing something that looks like a phone number.

    Only active while the order is open. Four-digit groups between 1900 and
    2099 are treated as years and ignored, so "room 204, 2024" passes while
    "123456789" or "+374 (91) 12-34-56" does not. Runs longer than one
    number are still flagged: two numbers written back to back, or a number
    padded with extra digits, carry a phone number inside them.
    """

    def __init__(self, min_digits: int = 7):
        self.min_digits = min_digits

    def is_violation(self, text: str, order_status: OrderStatus | None) -> bool:
        if order_status != OrderStatus.OPEN or not text:
            return False
        return any(
            self._looks_like_phone(match.group(0))
            for match in _CANDIDATE.finditer(text)
        )

    def _looks_like_phone(self, candidate: str) -> bool:
        groups = [g for g in _DIGIT_GROUP.findall(candidate) if not _is_year(g)]
        digit_count = sum(len(g) for g in groups)
        return digit_count >= self.min_digits


def _is_year(group: str) -> bool:
    return len(group) == 4 and 1900 <= int(group) <= 2099
