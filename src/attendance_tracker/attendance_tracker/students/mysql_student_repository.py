from __future__ import annotations

from typing import Dict, Optional

from ..core.enums import Strand
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository


def _to_student(row: dict) -> Student:
    return Student(
        student_id=int(row["id"]),
        name=row["name"],
        strand=Strand(row["strand"]),
        qr_code=row["qr_code"],
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, strand, qr_code FROM students WHERE id=%s", (student_id,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def get_by_qr_code(self, qr_code: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, strand, qr_code FROM students WHERE qr_code=%s", (qr_code,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def count_by_strand(self) -> Dict[Strand, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT strand, COUNT(*) AS n FROM students GROUP BY strand")
            return {Strand(r["strand"]): int(r["n"]) for r in fetchall(cur)}
