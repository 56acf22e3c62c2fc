from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Remarks
from .model import AbsenceSummary, AttendanceListRow, AttendanceRecord, ManualEntryResult


class AttendanceRepository(Protocol):
    """Ledger storage. At most one row per (student_id, attendance_date).

    Every mutating call is a single atomic statement; the conditional ones
    report whether they applied so the caller can re-read on a lost race.
    """

    def get_for_student_and_date(self, student_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        student_id: int,
        attendance_date: date,
        time_in: str,
        remarks: Remarks,
    ) -> Optional[int]:
        """Insert the day's row; None if one already exists for the key."""

        raise NotImplementedError

    def set_time_in(self, *, record_id: int, time_in: str, remarks: Remarks) -> bool:
        """Set time_in and remarks only while time_in is still NULL."""

        raise NotImplementedError

    def set_time_out(self, *, record_id: int, time_out: str) -> bool:
        """Set time_out only while time_in is set and time_out is still NULL."""

        raise NotImplementedError

    def upsert_manual(
        self,
        *,
        student_id: int,
        attendance_date: date,
        time_in: Optional[str],
        time_out: Optional[str],
        remarks: Remarks,
    ) -> ManualEntryResult:
        """Insert, or overwrite time_in, time_out and remarks of the existing row."""

        raise NotImplementedError

    def list_with_students(self, *, attendance_date: Optional[date] = None) -> Sequence[AttendanceListRow]:
        raise NotImplementedError

    def count_students_with_remarks(self, *, attendance_date: date, remarks: Remarks) -> int:
        raise NotImplementedError

    def absence_counts(self, *, since: date, until: date, min_days: int) -> Sequence[AbsenceSummary]:
        """Students with at least `min_days` absent rows dated within [since, until], most absences first."""

        raise NotImplementedError
