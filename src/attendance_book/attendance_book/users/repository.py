from __future__ import annotations

from typing import Optional, Protocol

from .model import Account


class UserRepository(Protocol):
    """Repository interface for accounts.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[Account]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def create_user(self, *, email: str, full_name: str, password_hash: str) -> int:
        raise NotImplementedError

    def update_user(
        self,
        user_id: int,
        *,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        password_hash: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> bool:
        """Update only the fields that are not None."""

        raise NotImplementedError
