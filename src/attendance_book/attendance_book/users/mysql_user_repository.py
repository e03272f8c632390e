from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Account
from .repository import UserRepository

_COLUMNS = "user_id, email, full_name, password_hash, avatar_url, created_at"


def _to_account(row: dict) -> Account:
    return Account(
        user_id=int(row["user_id"]),
        email=row["email"],
        full_name=row["full_name"],
        password_hash=row["password_hash"],
        avatar_url=row.get("avatar_url"),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM accounts WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_account(row) if row else None

    def get_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM accounts WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_account(row) if row else None

    def create_user(self, *, email: str, full_name: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO accounts(email, full_name, password_hash)
                VALUES(%s,%s,%s)
                """,
                (email, full_name, password_hash),
            )
            return int(cur.lastrowid)

    def update_user(
        self,
        user_id: int,
        *,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        password_hash: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> bool:
        fields = {
            "email": email,
            "full_name": full_name,
            "password_hash": password_hash,
            "avatar_url": avatar_url,
        }
        sets = [(col, value) for col, value in fields.items() if value is not None]
        if not sets:
            return True

        assignments = ", ".join(f"{col}=%s" for col, _ in sets)
        params = [value for _, value in sets] + [int(user_id)]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE accounts SET {assignments} WHERE user_id=%s", tuple(params))
            return cur.rowcount > 0
