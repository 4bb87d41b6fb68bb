from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional

from ..common.validators import (
    non_negative_int,
    optional_iso_date,
    require_hhmm,
    require_iso_date,
    require_non_empty,
    require_unit_type,
)
from ..core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..core.enums import MeetingShape
from ..core.exceptions import NotFoundError, ValidationError
from .file_store import FileStore, Uploads
from .model import Meeting, MeetingFilters, MeetingInput, MeetingPage
from .repository import MeetingRepository

logger = logging.getLogger(__name__)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class MeetingService:
    """Use case: record, browse and edit meetings."""

    def __init__(
        self,
        meetings: MeetingRepository,
        files: FileStore,
        *,
        shape: MeetingShape = MeetingShape.DENORMALIZED,
    ):
        self._meetings = meetings
        self._files = files
        self._shape = shape

    def parse_filters(self, args: Mapping[str, Any]) -> MeetingFilters:
        return MeetingFilters(
            project=_optional_text(args.get("project")),
            unit_type=_optional_text(args.get("unit_type")),
            start_date=optional_iso_date(args.get("start_date"), "start_date"),
            end_date=optional_iso_date(args.get("end_date"), "end_date"),
            location=_optional_text(args.get("location")),
        )

    def parse_input(self, fields: Mapping[str, Any]) -> MeetingInput:
        project = unit_type = None
        unit_id = None
        if self._shape == MeetingShape.REFERENTIAL:
            unit_id = non_negative_int(fields.get("unit_id"), "unit_id", default=0)
            if unit_id < 1:
                raise ValidationError("unit_id is required")
        else:
            project = require_non_empty(fields.get("project"), "project")
            unit_type = require_unit_type(fields.get("unit_type")).value

        return MeetingInput(
            project=project,
            unit_type=unit_type,
            unit_id=unit_id,
            meeting_date=require_iso_date(fields.get("meeting_date"), "meeting_date"),
            meeting_time=require_hhmm(fields.get("meeting_time"), "meeting_time"),
            location=(str(fields.get("location") or "")).strip(),
            participants_count=non_negative_int(fields.get("participants_count"), "participants_count"),
            notes=_optional_text(fields.get("notes")),
        )

    def list_meetings(
        self,
        *,
        filters: MeetingFilters,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> MeetingPage:
        if page < 1:
            raise ValidationError("page must be at least 1")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")

        total = self._meetings.count(filters=filters)
        rows = self._meetings.list_page(filters=filters, limit=limit, offset=(page - 1) * limit)
        return MeetingPage(
            meetings=list(rows),
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_records=total,
            limit=limit,
        )

    def get_meeting(self, meeting_id: int) -> Meeting:
        meeting = self._meetings.get_by_id(int(meeting_id))
        if not meeting:
            raise NotFoundError("Meeting not found")
        return meeting

    def create_meeting(self, *, fields: Mapping[str, Any], created_by: int, uploads: Optional[Uploads] = None) -> int:
        data = self.parse_input(fields)
        uploads = uploads or {}
        self._files.validate(uploads)

        meeting_id = self._meetings.create(data=data, created_by=created_by)
        self._attach(meeting_id, uploads)
        logger.info("Meeting %s created by admin %s", meeting_id, created_by)
        return meeting_id

    def update_meeting(self, *, meeting_id: int, fields: Mapping[str, Any], uploads: Optional[Uploads] = None) -> None:
        data = self.parse_input(fields)
        uploads = uploads or {}
        self._files.validate(uploads)

        if not self._meetings.update(meeting_id=int(meeting_id), data=data):
            raise NotFoundError("Meeting not found")
        # New files are appended; existing attachments stay.
        self._attach(int(meeting_id), uploads)

    def delete_meeting(self, meeting_id: int) -> None:
        if not self._meetings.delete(meeting_id=int(meeting_id)):
            raise NotFoundError("Meeting not found")
        logger.info("Meeting %s deleted", meeting_id)

    def _attach(self, meeting_id: int, uploads: Uploads) -> None:
        stored = self._files.save_all(uploads)
        if not stored:
            return
        try:
            self._meetings.add_attachments(meeting_id=meeting_id, files=stored)
        except Exception:
            logger.error(
                "Attachment rows for meeting %s not recorded; orphaned files: %s",
                meeting_id,
                ", ".join(f.filename for f in stored),
            )
            raise
