from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import format_hhmm, now_local, parse_hhmm, parse_iso_date
from ..common.validators import require_int
from ..core.constants import ABSENCE_ALERT_DAYS, ABSENCE_WINDOW_DAYS, DEFAULT_LATE_THRESHOLD
from ..core.enums import Remarks, ScanMethod, ScanOutcome, Strand
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceListRow, AttendanceRecord, AttendanceStats, ManualEntryResult, ScanResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

# A day's row only moves forward (none -> checked in -> checked out), so a
# scan needs at most one re-read per step it lost to a concurrent request.
MAX_TRANSITION_ATTEMPTS = 4


class AttendanceService:
    """Per-student, per-day attendance state machine plus the manual entry path.

    Scan flow: first scan records time_in and classifies present/late, second
    scan records time_out, any further scan is a no-op. The remarks set at
    check-in are never recomputed by the scan flow.

    Manual flow: overwrites time_in, time_out and remarks for the key.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        late_threshold: str = DEFAULT_LATE_THRESHOLD,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._students = students
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._late_threshold = parse_hhmm(late_threshold)
        self._clock = clock

    def record_scan(self, student_id: int, method: ScanMethod, *, now: datetime | None = None) -> ScanResult:
        now = now or self._clock()
        today = now.date()
        at = format_hhmm(now)

        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")

        for _ in range(MAX_TRANSITION_ATTEMPTS):
            record = self._attendance.get_for_student_and_date(student_id, today)

            if record is None:
                decision = self._classify(at)
                record_id = self._attendance.create_checkin(
                    student_id=student_id,
                    attendance_date=today,
                    time_in=at,
                    remarks=decision.remarks,
                )
                if record_id is None:
                    continue
                created = AttendanceRecord(
                    record_id=record_id,
                    student_id=student_id,
                    attendance_date=today,
                    time_in=at,
                    time_out=None,
                    remarks=decision.remarks,
                )
                return self._result(
                    ScanOutcome.CHECKED_IN, created, student, method, at,
                    f"Attendance recorded via {method.value}: {decision.message}",
                )

            if record.time_in is None:
                decision = self._classify(at)
                if not self._attendance.set_time_in(record_id=record.record_id, time_in=at, remarks=decision.remarks):
                    continue
                updated = replace(record, time_in=at, remarks=decision.remarks)
                return self._result(
                    ScanOutcome.CHECKED_IN, updated, student, method, at,
                    f"Time in recorded: {decision.message}",
                )

            if record.time_out is None:
                if not self._attendance.set_time_out(record_id=record.record_id, time_out=at):
                    continue
                updated = replace(record, time_out=at)
                return self._result(
                    ScanOutcome.CHECKED_OUT, updated, student, method, at, "Time out recorded successfully"
                )

            return self._result(
                ScanOutcome.ALREADY_COMPLETE, record, student, method, at, "Attendance already complete for today"
            )

        raise ConflictError("Attendance record kept changing, please retry")

    def _classify(self, at: str):
        strategy = self._factory.for_checkin(time_in=at, threshold=self._late_threshold)
        return strategy.decide_checkin(time_in=at, threshold=self._late_threshold)

    def _result(
        self,
        outcome: ScanOutcome,
        record: AttendanceRecord,
        student: Student,
        method: ScanMethod,
        at: str,
        message: str,
    ) -> ScanResult:
        logger.info(
            "Scan %s student=%s date=%s time=%s method=%s remarks=%s",
            outcome.value, student.student_id, record.attendance_date, at, method.value, record.remarks.value,
        )
        return ScanResult(outcome=outcome, record=record, student=student, method=method, time=at, message=message)

    def record_manual(
        self,
        *,
        student_id,
        attendance_date,
        time_in: Optional[str] = None,
        time_out: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> ManualEntryResult:
        student_id = require_int(student_id, "Student ID")
        if not attendance_date:
            raise ValidationError("Date is required")
        day = attendance_date if isinstance(attendance_date, date) else parse_iso_date(attendance_date)

        time_in = parse_hhmm(time_in) if time_in else None
        time_out = parse_hhmm(time_out) if time_out else None
        try:
            remarks_value = Remarks(remarks) if remarks else Remarks.PRESENT
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid remarks {remarks!r}")

        if not self._students.get_by_id(student_id):
            raise ValidationError("Student does not exist")

        result = self._attendance.upsert_manual(
            student_id=student_id,
            attendance_date=day,
            time_in=time_in,
            time_out=time_out,
            remarks=remarks_value,
        )
        logger.info(
            "Manual attendance %s student=%s date=%s remarks=%s",
            "updated" if result.updated else "created", student_id, day, remarks_value.value,
        )
        return result

    def list_records(self, *, attendance_date: Optional[str] = None) -> Sequence[AttendanceListRow]:
        day = parse_iso_date(attendance_date) if attendance_date else None
        return self._attendance.list_with_students(attendance_date=day)

    def stats(self, *, today: Optional[date] = None) -> AttendanceStats:
        """Dashboard figures: enrolment per strand, today's present count and
        students flagged for repeated absences in the trailing window."""
        today = today or self._clock().date()
        by_strand = self._students.count_by_strand()
        strand_counts = {strand: int(by_strand.get(strand, 0)) for strand in Strand}

        return AttendanceStats(
            stats_date=today,
            total_students=sum(strand_counts.values()),
            present_today=self._attendance.count_students_with_remarks(attendance_date=today, remarks=Remarks.PRESENT),
            strand_counts=strand_counts,
            frequent_absentees=list(
                self._attendance.absence_counts(
                    since=today - timedelta(days=ABSENCE_WINDOW_DAYS),
                    until=today,
                    min_days=ABSENCE_ALERT_DAYS,
                )
            ),
        )
