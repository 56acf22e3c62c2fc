from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import Remarks, Strand
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, mysql_time_to_hhmm
from .model import AbsenceSummary, AttendanceListRow, AttendanceRecord, ManualEntryResult
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["id"]),
        student_id=int(r["student_id"]),
        attendance_date=r["attendance_date"],
        time_in=mysql_time_to_hhmm(r.get("time_in")),
        time_out=mysql_time_to_hhmm(r.get("time_out")),
        remarks=Remarks(r["remarks"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_student_and_date(self, student_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, student_id, attendance_date, time_in, time_out, remarks
                FROM attendance_records
                WHERE student_id=%s AND attendance_date=%s
                """,
                (student_id, attendance_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_checkin(
        self,
        *,
        student_id: int,
        attendance_date: date,
        time_in: str,
        remarks: Remarks,
    ) -> Optional[int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(student_id, attendance_date, time_in, remarks)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (student_id, attendance_date, time_in, remarks.value),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            # uq_attendance_student_date: another request checked in first.
            if is_duplicate_key(e):
                return None
            raise

    def set_time_in(self, *, record_id: int, time_in: str, remarks: Remarks) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET time_in=%s, remarks=%s
                WHERE id=%s AND time_in IS NULL
                """,
                (time_in, remarks.value, record_id),
            )
            return cur.rowcount > 0

    def set_time_out(self, *, record_id: int, time_out: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET time_out=%s
                WHERE id=%s AND time_in IS NOT NULL AND time_out IS NULL
                """,
                (time_out, record_id),
            )
            return cur.rowcount > 0

    def upsert_manual(
        self,
        *,
        student_id: int,
        attendance_date: date,
        time_in: Optional[str],
        time_out: Optional[str],
        remarks: Remarks,
    ) -> ManualEntryResult:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(student_id, attendance_date, time_in, time_out, remarks)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    time_in=VALUES(time_in),
                    time_out=VALUES(time_out),
                    remarks=VALUES(remarks)
                """,
                (student_id, attendance_date, time_in, time_out, remarks.value),
            )
            # rowcount: 1 = inserted, 2 = existing row changed, 0 = existing row already equal
            if cur.rowcount == 1:
                return ManualEntryResult(record_id=int(cur.lastrowid), updated=False)

            cur.execute(
                "SELECT id FROM attendance_records WHERE student_id=%s AND attendance_date=%s",
                (student_id, attendance_date),
            )
            row = fetchone(cur)
            return ManualEntryResult(record_id=int(row["id"]), updated=True)

    def list_with_students(self, *, attendance_date: Optional[date] = None) -> Sequence[AttendanceListRow]:
        where = ""
        params: tuple = ()
        if attendance_date is not None:
            where = "WHERE a.attendance_date=%s"
            params = (attendance_date,)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.id, a.student_id, s.name AS student_name, s.strand,
                       a.attendance_date, a.time_in, a.time_out, a.remarks
                FROM attendance_records a
                JOIN students s ON s.id = a.student_id
                {where}
                ORDER BY a.attendance_date DESC, a.time_in DESC
                """,
                params,
            )
            rows = fetchall(cur)
            return [
                AttendanceListRow(
                    record_id=int(r["id"]),
                    student_id=int(r["student_id"]),
                    student_name=r["student_name"],
                    strand=Strand(r["strand"]),
                    attendance_date=r["attendance_date"],
                    time_in=mysql_time_to_hhmm(r.get("time_in")),
                    time_out=mysql_time_to_hhmm(r.get("time_out")),
                    remarks=Remarks(r["remarks"]),
                )
                for r in rows
            ]

    def count_students_with_remarks(self, *, attendance_date: date, remarks: Remarks) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(DISTINCT student_id) AS n
                FROM attendance_records
                WHERE attendance_date=%s AND remarks=%s
                """,
                (attendance_date, remarks.value),
            )
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def absence_counts(self, *, since: date, until: date, min_days: int) -> Sequence[AbsenceSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.id, s.name, COUNT(a.id) AS absent_days
                FROM attendance_records a
                JOIN students s ON s.id = a.student_id
                WHERE a.attendance_date BETWEEN %s AND %s
                  AND a.remarks=%s
                GROUP BY s.id, s.name
                HAVING absent_days >= %s
                ORDER BY absent_days DESC, s.name
                """,
                (since, until, Remarks.ABSENT.value, min_days),
            )
            return [
                AbsenceSummary(student_id=int(r["id"]), student_name=r["name"], absent_days=int(r["absent_days"]))
                for r in fetchall(cur)
            ]
