from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Account:
    """Domain entity: a staff account that owns a roster and its history."""

    user_id: int
    email: str
    full_name: str
    password_hash: str
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class SessionUser:
    """What we store/return for the signed-in user (never the password hash)."""

    user_id: int
    email: str
    full_name: str
    avatar_url: Optional[str] = None

    @classmethod
    def from_account(cls, account: Account) -> "SessionUser":
        return cls(
            user_id=account.user_id,
            email=account.email,
            full_name=account.full_name,
            avatar_url=account.avatar_url,
        )

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "full_name": self.full_name,
            "avatar_url": self.avatar_url,
        }
