from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import AttachmentKind


@dataclass(frozen=True)
class Attachment:
    attachment_id: int
    meeting_id: int
    filename: str
    kind: AttachmentKind
    original_name: str
    file_size: Optional[int]
    created_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attachment_id,
            "meeting_id": self.meeting_id,
            "filename": self.filename,
            "type": self.kind.value,
            "original_name": self.original_name,
            "file_size": self.file_size,
            "url": f"/uploads/{self.filename}",
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class StoredFile:
    """A file already written to the upload directory, not yet recorded."""

    filename: str
    kind: AttachmentKind
    original_name: str
    file_size: int


@dataclass(frozen=True)
class Meeting:
    """Domain entity: one meeting attendance record.

    ``unit_id`` is only set when meetings still reference units directly.
    """

    meeting_id: int
    project: str
    unit_type: str
    meeting_date: str
    meeting_time: str
    location: str
    participants_count: int
    notes: Optional[str]
    created_by: int
    created_by_name: Optional[str] = None
    unit_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    attachments: tuple[Attachment, ...] = ()

    def to_dict(self, *, with_attachments: bool = False) -> dict:
        data = {
            "id": self.meeting_id,
            "project": self.project,
            "unit_type": self.unit_type,
            "unit_id": self.unit_id,
            "meeting_date": self.meeting_date,
            "meeting_time": self.meeting_time,
            "location": self.location,
            "participants_count": self.participants_count,
            "notes": self.notes,
            "created_by": self.created_by,
            "created_by_name": self.created_by_name,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if with_attachments:
            data["attachments"] = [a.to_dict() for a in self.attachments]
        return data


@dataclass(frozen=True)
class MeetingInput:
    """Validated write payload."""

    meeting_date: str
    meeting_time: str
    location: str
    participants_count: int
    notes: Optional[str]
    project: Optional[str] = None
    unit_type: Optional[str] = None
    unit_id: Optional[int] = None


@dataclass(frozen=True)
class MeetingFilters:
    """Conjunctive list filters; None means "not filtered"."""

    project: Optional[str] = None
    unit_type: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    location: Optional[str] = None


@dataclass(frozen=True)
class MeetingPage:
    meetings: list[Meeting] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 0
    total_records: int = 0
    limit: int = 20

    def to_dict(self) -> dict:
        return {
            "meetings": [m.to_dict() for m in self.meetings],
            "pagination": {
                "current_page": self.current_page,
                "total_pages": self.total_pages,
                "total_records": self.total_records,
                "limit": self.limit,
            },
        }
