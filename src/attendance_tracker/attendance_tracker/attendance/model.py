from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from ..core.enums import Remarks, ScanMethod, ScanOutcome, Strand
from ..students.model import Student


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance for one day.

    Times are 24-hour "HH:MM" wall-clock strings.
    """

    record_id: int
    student_id: int
    attendance_date: date
    time_in: Optional[str]
    time_out: Optional[str]
    remarks: Remarks

    @property
    def is_complete(self) -> bool:
        return self.time_in is not None and self.time_out is not None


@dataclass(frozen=True)
class ScanResult:
    outcome: ScanOutcome
    record: AttendanceRecord
    student: Student
    method: ScanMethod
    time: str
    message: str

    @property
    def remarks(self) -> Remarks:
        return self.record.remarks


@dataclass(frozen=True)
class ManualEntryResult:
    record_id: int
    updated: bool


@dataclass(frozen=True)
class AttendanceListRow:
    """Read-model for the attendance listing (joined with the student)."""

    record_id: int
    student_id: int
    student_name: str
    strand: Strand
    attendance_date: date
    time_in: Optional[str]
    time_out: Optional[str]
    remarks: Remarks


@dataclass(frozen=True)
class AbsenceSummary:
    student_id: int
    student_name: str
    absent_days: int


@dataclass(frozen=True)
class AttendanceStats:
    """Dashboard figures for one day."""

    stats_date: date
    total_students: int
    present_today: int
    strand_counts: Dict[Strand, int]
    frequent_absentees: List[AbsenceSummary] = field(default_factory=list)
