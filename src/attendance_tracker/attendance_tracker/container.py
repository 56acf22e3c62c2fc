from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Mapping, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_LATE_THRESHOLD, DEFAULT_SESSION_DAYS
from .core.enums import ScanMethod
from .database.connection import DBConfig, DatabaseConnection
from .scanner.recognizer import Recognizer
from .scanner.service import ScannerService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionAuthority
from .sessions.tokens import SessionTokenSigner
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    sessions_repo: SessionRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    session_authority: SessionAuthority
    user_service: UserService
    attendance_service: AttendanceService
    scanner_service: ScannerService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    users_repo: UserRepository,
    sessions_repo: SessionRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    jwt_secret: str,
    session_days: int = DEFAULT_SESSION_DAYS,
    late_threshold: str = DEFAULT_LATE_THRESHOLD,
    recognizers: Optional[Mapping[ScanMethod, Recognizer]] = None,
    clock: Callable[[], datetime] = now_local,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    session_authority = SessionAuthority(
        users_repo,
        sessions_repo,
        SessionTokenSigner(jwt_secret),
        session_days=session_days,
        clock=clock,
    )
    user_service = UserService(users_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        students_repo,
        strategy_factory=AttendanceStrategyFactory(),
        late_threshold=late_threshold,
        clock=clock,
    )
    scanner_service = ScannerService(students_repo, recognizers)

    return Container(
        users_repo=users_repo,
        sessions_repo=sessions_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        session_authority=session_authority,
        user_service=user_service,
        attendance_service=attendance_service,
        scanner_service=scanner_service,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    session_days: int = DEFAULT_SESSION_DAYS,
    late_threshold: str = DEFAULT_LATE_THRESHOLD,
    recognizers: Optional[Mapping[ScanMethod, Recognizer]] = None,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return build_services(
        users_repo=MySQLUserRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        jwt_secret=jwt_secret,
        session_days=session_days,
        late_threshold=late_threshold,
        recognizers=recognizers,
        conn=conn,
    )
