from __future__ import annotations

import threading
from collections import Counter
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.attendance_tracker.attendance_tracker.attendance.model import (
    AbsenceSummary,
    AttendanceListRow,
    AttendanceRecord,
    ManualEntryResult,
)
from src.attendance_tracker.attendance_tracker.container import build_services
from src.attendance_tracker.attendance_tracker.core.enums import Remarks, Role, Strand
from src.attendance_tracker.attendance_tracker.core.exceptions import DuplicateUsernameError
from src.attendance_tracker.attendance_tracker.main import create_app
from src.attendance_tracker.attendance_tracker.sessions.model import AuthenticatedUser
from src.attendance_tracker.attendance_tracker.students.model import Student
from src.attendance_tracker.attendance_tracker.users.model import UserAccount

JWT_TEST_SECRET = "unit-test-jwt-secret-0123456789abcdef0123"


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, hour: int, minute: int) -> None:
        self.now = self.now.replace(hour=hour, minute=minute)

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[int, UserAccount] = {}
        self._next_id = 1

    def add(self, username: str, password: str, role: Role = Role.TEACHER) -> UserAccount:
        user_id = self.create_user(username=username, password_hash=generate_password_hash(password), role=role)
        return self._by_id[user_id]

    def get_by_id(self, user_id: int) -> Optional[UserAccount]:
        return self._by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[UserAccount]:
        return next((u for u in self._by_id.values() if u.username == username), None)

    def create_user(self, *, username: str, password_hash: str, role: Role) -> int:
        if self.get_by_username(username):
            raise DuplicateUsernameError("Username already exists")
        user_id = self._next_id
        self._next_id += 1
        self._by_id[user_id] = UserAccount(user_id=user_id, username=username, password_hash=password_hash, role=role)
        return user_id


class InMemorySessions:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.rows: dict[str, tuple[int, datetime, datetime]] = {}
        self.lookups = 0

    def create(self, *, user_id: int, token: str, issued_at: datetime, expires_at: datetime) -> int:
        self.rows[token] = (user_id, issued_at, expires_at)
        return len(self.rows)

    def get_active_user(self, token: str, now: datetime) -> Optional[AuthenticatedUser]:
        self.lookups += 1
        row = self.rows.get(token)
        if not row or not now < row[2]:
            return None
        user = self._users.get_by_id(row[0])
        return AuthenticatedUser(user_id=user.user_id, username=user.username, role=user.role)

    def delete(self, token: str) -> bool:
        return self.rows.pop(token, None) is not None

    def delete_expired(self, now: datetime) -> int:
        expired = [t for t, row in self.rows.items() if row[2] <= now]
        for t in expired:
            del self.rows[t]
        return len(expired)


class InMemoryStudents:
    def __init__(self, students: list[Student]):
        self._by_id = {s.student_id: s for s in students}

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._by_id.get(student_id)

    def get_by_qr_code(self, qr_code: str) -> Optional[Student]:
        return next((s for s in self._by_id.values() if s.qr_code == qr_code), None)

    def add(self, student: Student) -> None:
        self._by_id[student.student_id] = student

    def count_by_strand(self) -> dict[Strand, int]:
        return dict(Counter(s.strand for s in self._by_id.values()))


class InMemoryAttendance:
    """Ledger fake with the same atomicity as the MySQL one.

    The lock plays the role of the unique key and of single-statement
    conditional UPDATEs.
    """

    def __init__(self, students: InMemoryStudents):
        self._students = students
        self._lock = threading.Lock()
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0

    def _find(self, record_id: int):
        return next((k for k, r in self._by_key.items() if r.record_id == record_id), None)

    def all_for(self, student_id: int, attendance_date: date) -> list[AttendanceRecord]:
        return [r for r in self._by_key.values() if r.student_id == student_id and r.attendance_date == attendance_date]

    def get_for_student_and_date(self, student_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._by_key.get((student_id, attendance_date))

    def create_checkin(self, *, student_id: int, attendance_date: date, time_in: str, remarks: Remarks) -> Optional[int]:
        with self._lock:
            if (student_id, attendance_date) in self._by_key:
                return None
            self._id += 1
            self._by_key[(student_id, attendance_date)] = AttendanceRecord(
                record_id=self._id,
                student_id=student_id,
                attendance_date=attendance_date,
                time_in=time_in,
                time_out=None,
                remarks=remarks,
            )
            return self._id

    def set_time_in(self, *, record_id: int, time_in: str, remarks: Remarks) -> bool:
        with self._lock:
            key = self._find(record_id)
            if key is None or self._by_key[key].time_in is not None:
                return False
            self._by_key[key] = replace(self._by_key[key], time_in=time_in, remarks=remarks)
            return True

    def set_time_out(self, *, record_id: int, time_out: str) -> bool:
        with self._lock:
            key = self._find(record_id)
            if key is None:
                return False
            rec = self._by_key[key]
            if rec.time_in is None or rec.time_out is not None:
                return False
            self._by_key[key] = replace(rec, time_out=time_out)
            return True

    def upsert_manual(self, *, student_id, attendance_date, time_in, time_out, remarks) -> ManualEntryResult:
        with self._lock:
            key = (student_id, attendance_date)
            existing = self._by_key.get(key)
            if existing:
                self._by_key[key] = replace(existing, time_in=time_in, time_out=time_out, remarks=remarks)
                return ManualEntryResult(record_id=existing.record_id, updated=True)
            self._id += 1
            self._by_key[key] = AttendanceRecord(
                record_id=self._id,
                student_id=student_id,
                attendance_date=attendance_date,
                time_in=time_in,
                time_out=time_out,
                remarks=remarks,
            )
            return ManualEntryResult(record_id=self._id, updated=False)

    def count_students_with_remarks(self, *, attendance_date: date, remarks: Remarks) -> int:
        return len({r.student_id for r in self._by_key.values() if r.attendance_date == attendance_date and r.remarks == remarks})

    def absence_counts(self, *, since: date, until: date, min_days: int):
        counts = Counter(
            r.student_id
            for r in self._by_key.values()
            if r.remarks == Remarks.ABSENT and since <= r.attendance_date <= until
        )
        out = [
            AbsenceSummary(student_id=sid, student_name=self._students.get_by_id(sid).name, absent_days=n)
            for sid, n in counts.items()
            if n >= min_days
        ]
        return sorted(out, key=lambda a: (-a.absent_days, a.student_name))

    def list_with_students(self, *, attendance_date: Optional[date] = None):
        rows = [r for r in self._by_key.values() if attendance_date is None or r.attendance_date == attendance_date]
        rows.sort(key=lambda r: (r.attendance_date, r.time_in or ""), reverse=True)
        out = []
        for r in rows:
            student = self._students.get_by_id(r.student_id)
            out.append(
                AttendanceListRow(
                    record_id=r.record_id,
                    student_id=r.student_id,
                    student_name=student.name,
                    strand=student.strand,
                    attendance_date=r.attendance_date,
                    time_in=r.time_in,
                    time_out=r.time_out,
                    remarks=r.remarks,
                )
            )
        return out


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 7, 55, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    repo = InMemoryUsers()
    repo.add("admin", "admin123", Role.ADMIN)
    repo.add("teacher", "secret123", Role.TEACHER)
    return repo


@pytest.fixture
def sessions_repo(users_repo) -> InMemorySessions:
    return InMemorySessions(users_repo)


@pytest.fixture
def students_repo() -> InMemoryStudents:
    return InMemoryStudents(
        [
            Student(student_id=42, name="Juan Dela Cruz", strand=Strand.HUMSS, qr_code="STU-7F3A9C21"),
            Student(student_id=7, name="Maria Santos", strand=Strand.ABM, qr_code="STU-1B84E0D7"),
        ]
    )


@pytest.fixture
def attendance_repo(students_repo) -> InMemoryAttendance:
    return InMemoryAttendance(students_repo)


@pytest.fixture
def recognizers() -> dict:
    return {}


@pytest.fixture
def container(users_repo, sessions_repo, students_repo, attendance_repo, recognizers, clock):
    return build_services(
        users_repo=users_repo,
        sessions_repo=sessions_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        jwt_secret=JWT_TEST_SECRET,
        recognizers=recognizers,
        clock=clock,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username: str, password: str) -> dict:
        resp = client.post("/api/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return {"Authorization": f"Bearer {resp.get_json()['token']}"}

    return _login


@pytest.fixture
def auth_headers(login) -> dict:
    return login("teacher", "secret123")


@pytest.fixture
def admin_headers(login) -> dict:
    return login("admin", "admin123")
