from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import now_local, parse_iso_datetime
from ..core.exceptions import RecordNotFoundError
from ..rest.client import RestClient
from .model import Account
from .repository import UserRepository

_COLLECTION = "/accounts"


def _to_account(doc: dict) -> Account:
    created_at = doc.get("createdAt")
    return Account(
        user_id=int(doc["id"]),
        email=doc.get("email") or "",
        full_name=doc.get("fullName") or "",
        password_hash=doc.get("passwordHash") or "",
        avatar_url=doc.get("avatarUrl"),
        created_at=parse_iso_datetime(created_at) if created_at else None,
    )


def _int_id(doc: dict) -> int:
    value = str(doc.get("id", ""))
    return int(value) if value.isdigit() else 0


class RestUserRepository(UserRepository):
    """Accounts kept in the document store, so owner ids survive restarts.

    Ids are assigned here (max + 1) because json-server may hand out
    non-numeric ids and owners are keyed by int.
    """

    def __init__(self, client: RestClient):
        self._client = client

    def get_by_id(self, user_id: int) -> Optional[Account]:
        try:
            doc = self._client.get(f"{_COLLECTION}/{int(user_id)}")
        except RecordNotFoundError:
            return None
        return _to_account(doc) if doc else None

    def get_by_email(self, email: str) -> Optional[Account]:
        docs = self._client.get(_COLLECTION, email=email) or []
        doc = next((d for d in docs if d.get("email") == email), None)
        return _to_account(doc) if doc else None

    def create_user(self, *, email: str, full_name: str, password_hash: str) -> int:
        docs = self._client.get(_COLLECTION) or []
        user_id = max((_int_id(d) for d in docs), default=0) + 1
        self._client.post(
            _COLLECTION,
            {
                "id": str(user_id),
                "email": email,
                "fullName": full_name,
                "passwordHash": password_hash,
                "avatarUrl": None,
                "createdAt": now_local().isoformat(),
            },
        )
        return user_id

    def update_user(
        self,
        user_id: int,
        *,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        password_hash: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> bool:
        try:
            doc = self._client.get(f"{_COLLECTION}/{int(user_id)}")
        except RecordNotFoundError:
            return False
        changes = {
            k: v
            for k, v in {
                "email": email,
                "fullName": full_name,
                "passwordHash": password_hash,
                "avatarUrl": avatar_url,
            }.items()
            if v is not None
        }
        self._client.put(f"{_COLLECTION}/{int(user_id)}", dict(doc, **changes))
        return True
