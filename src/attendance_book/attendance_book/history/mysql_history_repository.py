from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import AttendanceSnapshot, SnapshotStudent, students_from_documents, students_to_documents
from .repository import HistoryRepository

_COLUMNS = "snapshot_id, owner_id, group_name, weekday, session_date, created_at, students"


def _to_snapshot(r: dict) -> AttendanceSnapshot:
    return AttendanceSnapshot(
        snapshot_id=str(r["snapshot_id"]),
        owner_id=int(r["owner_id"]),
        group=r["group_name"],
        weekday=r["weekday"],
        session_date=r["session_date"],
        created_at=r["created_at"],
        students=students_from_documents(load_json(r.get("students"))),
    )


def _as_int_id(snapshot_id: str) -> Optional[int]:
    return int(snapshot_id) if str(snapshot_id).isdigit() else None


class MySQLHistoryRepository(HistoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_owner(self, owner_id: int) -> Sequence[AttendanceSnapshot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_snapshots
                WHERE owner_id=%s
                ORDER BY session_date DESC, created_at DESC
                """,
                (int(owner_id),),
            )
            return [_to_snapshot(r) for r in fetchall(cur)]

    def get_by_id(self, snapshot_id: str, *, owner_id: int) -> Optional[AttendanceSnapshot]:
        sid = _as_int_id(snapshot_id)
        if sid is None:
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_snapshots WHERE snapshot_id=%s AND owner_id=%s",
                (sid, int(owner_id)),
            )
            r = fetchone(cur)
            return _to_snapshot(r) if r else None

    def create(
        self,
        *,
        owner_id: int,
        group: str,
        weekday: str,
        session_date: date,
        created_at: datetime,
        students: Sequence[SnapshotStudent],
    ) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_snapshots(owner_id, group_name, weekday, session_date, created_at, students)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(owner_id), group, weekday, session_date, created_at, dump_json(students_to_documents(students))),
            )
            return str(cur.lastrowid)

    def replace(self, snapshot: AttendanceSnapshot) -> bool:
        sid = _as_int_id(snapshot.snapshot_id)
        if sid is None:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_snapshots
                SET group_name=%s, weekday=%s, session_date=%s, created_at=%s, students=%s
                WHERE snapshot_id=%s AND owner_id=%s
                """,
                (
                    snapshot.group,
                    snapshot.weekday,
                    snapshot.session_date,
                    snapshot.created_at,
                    dump_json(students_to_documents(snapshot.students)),
                    sid,
                    int(snapshot.owner_id),
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, snapshot_id: str, *, owner_id: int) -> bool:
        sid = _as_int_id(snapshot_id)
        if sid is None:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_snapshots WHERE snapshot_id=%s AND owner_id=%s",
                (sid, int(owner_id)),
            )
            return cur.rowcount > 0
