"""
User Entity - A platform user and credit account holder.
"""

from dataclasses import dataclass
from typing import Optional

from marketplace.domain.value_objects import UserId


@dataclass
class User:
    id: UserId
    role: str
    credit_balance: int = 0
    name: Optional[str] = None
    email: Optional[str] = None
    fcm_token: Optional[str] = None

    def __post_init__(self):
        if self.credit_balance < 0:
            raise ValueError(f"Credit balance cannot be negative: {self.credit_balance}")

    @property
    def is_specialist(self) -> bool:
        return self.role == "specialist"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
