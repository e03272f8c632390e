from __future__ import annotations

import threading
from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import now_local
from .model import Account
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """Process-local accounts (memory/rest backends and tests)."""

    def __init__(self):
        self._lock = threading.Lock()
        self._rows: dict[int, Account] = {}
        self._next_id = 1

    def get_by_id(self, user_id: int) -> Optional[Account]:
        with self._lock:
            return self._rows.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[Account]:
        with self._lock:
            return next((a for a in self._rows.values() if a.email == email), None)

    def create_user(self, *, email: str, full_name: str, password_hash: str) -> int:
        with self._lock:
            uid = self._next_id
            self._next_id += 1
            self._rows[uid] = Account(
                user_id=uid,
                email=email,
                full_name=full_name,
                password_hash=password_hash,
                created_at=now_local(),
            )
            return uid

    def update_user(
        self,
        user_id: int,
        *,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        password_hash: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> bool:
        with self._lock:
            account = self._rows.get(int(user_id))
            if not account:
                return False
            changes = {
                k: v
                for k, v in {
                    "email": email,
                    "full_name": full_name,
                    "password_hash": password_hash,
                    "avatar_url": avatar_url,
                }.items()
                if v is not None
            }
            self._rows[account.user_id] = replace(account, **changes)
            return True
