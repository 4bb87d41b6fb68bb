from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .core.constants import DEFAULT_TOKEN_HOURS, MAX_FILE_SIZE_BYTES
from .database.connection import DatabaseConnection
from .database.profile import SchemaProfile
from .meetings.file_store import FileStore
from .meetings.service import MeetingService
from .meetings.sql_meeting_repository import SqlMeetingRepository
from .statistics.factory import GroupingStrategyFactory
from .statistics.service import StatisticsService
from .statistics.sql_statistics_repository import SqlStatisticsRepository
from .units.service import UnitService
from .units.sql_unit_repository import SqlUnitRepository
from .users.service import AuthService, ProfileService
from .users.sql_admin_repository import SqlAdminRepository
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    profile: SchemaProfile

    admins_repo: SqlAdminRepository
    units_repo: SqlUnitRepository
    meetings_repo: SqlMeetingRepository
    statistics_repo: SqlStatisticsRepository

    file_store: FileStore
    token_service: TokenService

    auth_service: AuthService
    profile_service: ProfileService
    unit_service: UnitService
    meeting_service: MeetingService
    statistics_service: StatisticsService


def build_container(*, conn: DatabaseConnection, profile: SchemaProfile, settings: Mapping[str, Any]) -> Container:
    admins_repo = SqlAdminRepository(conn)
    units_repo = SqlUnitRepository(conn, profile)
    meetings_repo = SqlMeetingRepository(conn, profile)
    statistics_repo = SqlStatisticsRepository(conn, profile)

    file_store = FileStore(
        settings.get("UPLOAD_DIR", "uploads"),
        max_file_size=int(settings.get("MAX_FILE_SIZE", MAX_FILE_SIZE_BYTES)),
    )
    token_service = TokenService(
        str(settings.get("JWT_SECRET") or settings.get("SECRET_KEY") or ""),
        expires_hours=int(settings.get("JWT_EXPIRES_HOURS", DEFAULT_TOKEN_HOURS)),
    )

    return Container(
        conn=conn,
        profile=profile,
        admins_repo=admins_repo,
        units_repo=units_repo,
        meetings_repo=meetings_repo,
        statistics_repo=statistics_repo,
        file_store=file_store,
        token_service=token_service,
        auth_service=AuthService(admins_repo, token_service),
        profile_service=ProfileService(admins_repo),
        unit_service=UnitService(units_repo),
        meeting_service=MeetingService(meetings_repo, file_store, shape=profile.meeting_shape),
        statistics_service=StatisticsService(statistics_repo, factory=GroupingStrategyFactory()),
    )
