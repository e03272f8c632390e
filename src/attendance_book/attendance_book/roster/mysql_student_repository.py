from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import Student, StudentInput
from .repository import StudentRepository


def _to_student(r: dict) -> Student:
    return Student(
        student_id=str(r["student_id"]),
        owner_id=int(r["owner_id"]),
        full_name=r["full_name"],
        phone_number=r["phone_number"],
        group=r["group_name"],
        week_days=tuple(load_json(r.get("week_days")) or ()),
    )


def _as_int_id(student_id: str) -> Optional[int]:
    return int(student_id) if str(student_id).isdigit() else None


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_owner(self, owner_id: int) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, owner_id, full_name, phone_number, group_name, week_days
                FROM students
                WHERE owner_id=%s
                ORDER BY student_id ASC
                """,
                (int(owner_id),),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: str, *, owner_id: int) -> Optional[Student]:
        sid = _as_int_id(student_id)
        if sid is None:
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, owner_id, full_name, phone_number, group_name, week_days
                FROM students
                WHERE student_id=%s AND owner_id=%s
                """,
                (sid, int(owner_id)),
            )
            r = fetchone(cur)
            return _to_student(r) if r else None

    def create(self, *, owner_id: int, data: StudentInput) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(owner_id, full_name, phone_number, group_name, week_days)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(owner_id), data.full_name, data.phone_number, data.group, dump_json(list(data.week_days))),
            )
            return str(cur.lastrowid)

    def update_by_id(self, student_id: str, *, owner_id: int, data: StudentInput) -> bool:
        sid = _as_int_id(student_id)
        if sid is None:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET full_name=%s, phone_number=%s, group_name=%s, week_days=%s
                WHERE student_id=%s AND owner_id=%s
                """,
                (data.full_name, data.phone_number, data.group, dump_json(list(data.week_days)), sid, int(owner_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, student_id: str, *, owner_id: int) -> bool:
        sid = _as_int_id(student_id)
        if sid is None:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s AND owner_id=%s", (sid, int(owner_id)))
            return cur.rowcount > 0
