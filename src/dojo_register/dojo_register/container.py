from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.mysql_admin_repository import MySQLAdminRepository
from .auth.repository import AdminRepository
from .auth.service import AuthService
from .auth.tokens import TokenService
from .core.constants import DEFAULT_TOKEN_MAX_AGE_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    reports_repo: ReportRepository
    admins_repo: AdminRepository

    token_service: TokenService
    auth_service: AuthService
    student_service: StudentService
    attendance_service: AttendanceService
    report_service: ReportService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    reports_repo: ReportRepository,
    admins_repo: AdminRepository,
    secret_key: str,
    token_max_age: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of any repository implementations (MySQL or in-memory)."""

    token_service = TokenService(secret_key, max_age_seconds=token_max_age)
    return Container(
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        reports_repo=reports_repo,
        admins_repo=admins_repo,
        token_service=token_service,
        auth_service=AuthService(admins_repo, token_service),
        student_service=StudentService(students_repo),
        attendance_service=AttendanceService(attendance_repo, students_repo),
        report_service=ReportService(reports_repo, students_repo),
        conn=conn,
    )


def build_container(*, db_config: dict, secret_key: str, token_max_age: int = DEFAULT_TOKEN_MAX_AGE_SECONDS) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(db_config.get("pool_size", 5)),
        pool_timeout=float(db_config.get("pool_timeout", 5.0)),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire(
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        admins_repo=MySQLAdminRepository(conn),
        secret_key=secret_key,
        token_max_age=token_max_age,
        conn=conn,
    )
