from __future__ import annotations

from io import BytesIO

import pytest
from werkzeug.datastructures import FileStorage

from src.meeting_tracker.meeting_tracker.core.enums import AttachmentKind, MeetingShape
from src.meeting_tracker.meeting_tracker.core.exceptions import NotFoundError, ValidationError
from src.meeting_tracker.meeting_tracker.meetings.file_store import FileStore
from src.meeting_tracker.meeting_tracker.meetings.model import Attachment, Meeting, MeetingFilters
from src.meeting_tracker.meeting_tracker.meetings.service import MeetingService


class FakeMeetingsRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Meeting] = {}
        self.attachments: list[Attachment] = []
        self.fail_attachments = False

    def _from_input(self, meeting_id, data, created_by):
        return Meeting(
            meeting_id=meeting_id,
            project=data.project,
            unit_type=data.unit_type,
            meeting_date=data.meeting_date,
            meeting_time=data.meeting_time,
            location=data.location,
            participants_count=data.participants_count,
            notes=data.notes,
            created_by=created_by,
        )

    def list_page(self, *, filters, limit, offset):
        ordered = sorted(self.rows.values(), key=lambda m: m.meeting_id, reverse=True)
        return ordered[offset : offset + limit]

    def count(self, *, filters):
        return len(self.rows)

    def get_by_id(self, meeting_id):
        return self.rows.get(int(meeting_id))

    def create(self, *, data, created_by):
        mid = self._next_id
        self._next_id += 1
        self.rows[mid] = self._from_input(mid, data, created_by)
        return mid

    def update(self, *, meeting_id, data):
        if meeting_id not in self.rows:
            return False
        self.rows[meeting_id] = self._from_input(meeting_id, data, self.rows[meeting_id].created_by)
        return True

    def delete(self, *, meeting_id):
        return self.rows.pop(meeting_id, None) is not None

    def add_attachments(self, *, meeting_id, files):
        if self.fail_attachments:
            raise RuntimeError("insert failed")
        for f in files:
            self.attachments.append(
                Attachment(
                    attachment_id=len(self.attachments) + 1,
                    meeting_id=meeting_id,
                    filename=f.filename,
                    kind=f.kind,
                    original_name=f.original_name,
                    file_size=f.file_size,
                )
            )

    def list_attachments(self, *, meeting_id):
        return [a for a in self.attachments if a.meeting_id == meeting_id]


def _fields(**overrides):
    fields = {
        "project": "2",
        "unit_type": "pai",
        "meeting_date": "2024-01-15",
        "meeting_time": "19:30",
        "location": " Hall ",
        "participants_count": "12",
        "notes": "",
    }
    fields.update(overrides)
    return fields


def _upload(name="photo.png", content_type="image/png", data=b"\x89PNG"):
    return FileStorage(stream=BytesIO(data), filename=name, content_type=content_type)


@pytest.fixture
def repo():
    return FakeMeetingsRepo()


@pytest.fixture
def service(repo, tmp_path):
    return MeetingService(repo, FileStore(tmp_path / "uploads", max_file_size=1024))


def test_create_meeting_normalizes_fields(service, repo):
    mid = service.create_meeting(fields=_fields(), created_by=1)

    meeting = repo.get_by_id(mid)
    assert meeting.location == "Hall"
    assert meeting.participants_count == 12
    assert meeting.notes is None
    assert meeting.created_by == 1


def test_participants_default_to_zero(service, repo):
    mid = service.create_meeting(fields=_fields(participants_count=""), created_by=1)

    assert repo.get_by_id(mid).participants_count == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"participants_count": "-1"},
        {"participants_count": "many"},
        {"meeting_date": "15/01/2024"},
        {"meeting_date": ""},
        {"meeting_time": "7pm"},
        {"meeting_time": "24:00"},
        {"project": " "},
        {"unit_type": "district"},
    ],
)
def test_invalid_meeting_is_rejected_before_writing(service, repo, overrides):
    with pytest.raises(ValidationError):
        service.create_meeting(fields=_fields(**overrides), created_by=1)

    assert repo.rows == {}


def test_referential_shape_requires_unit_id(repo, tmp_path):
    service = MeetingService(repo, FileStore(tmp_path), shape=MeetingShape.REFERENTIAL)

    with pytest.raises(ValidationError, match="unit_id"):
        service.parse_input(_fields())

    data = service.parse_input(_fields(unit_id="4"))
    assert data.unit_id == 4
    assert data.project is None


def test_pagination_math(service):
    for _ in range(45):
        service.create_meeting(fields=_fields(), created_by=1)

    page = service.list_meetings(filters=MeetingFilters(), page=3, limit=20)

    assert page.total_records == 45
    assert page.total_pages == 3
    assert len(page.meetings) == 5
    assert page.to_dict()["pagination"] == {"current_page": 3, "total_pages": 3, "total_records": 45, "limit": 20}


def test_empty_result_has_zero_pages(service):
    page = service.list_meetings(filters=MeetingFilters())

    assert page.total_pages == 0
    assert page.meetings == []


@pytest.mark.parametrize("page,limit", [(0, 20), (1, 0), (1, 101)])
def test_invalid_paging_is_rejected(service, page, limit):
    with pytest.raises(ValidationError):
        service.list_meetings(filters=MeetingFilters(), page=page, limit=limit)


def test_parse_filters_drops_blank_values(service):
    filters = service.parse_filters({"project": " ", "unit_type": "group", "start_date": "2024-01-01", "location": "Hall"})

    assert filters == MeetingFilters(unit_type="group", start_date="2024-01-01", location="Hall")
    with pytest.raises(ValidationError):
        service.parse_filters({"end_date": "yesterday"})


def test_update_appends_attachments(service, repo, tmp_path):
    mid = service.create_meeting(
        fields=_fields(),
        created_by=1,
        uploads={AttachmentKind.IMAGE: [_upload()]},
    )

    service.update_meeting(
        meeting_id=mid,
        fields=_fields(location="Park"),
        uploads={AttachmentKind.FILE: [_upload("minutes.pdf", "application/pdf", b"%PDF")]},
    )

    kinds = [a.kind for a in repo.list_attachments(meeting_id=mid)]
    assert kinds == [AttachmentKind.IMAGE, AttachmentKind.FILE]
    assert repo.get_by_id(mid).location == "Park"
    assert len(list((tmp_path / "uploads").iterdir())) == 2


def test_rejected_upload_writes_nothing(service, repo, tmp_path):
    with pytest.raises(ValidationError, match="Unsupported"):
        service.create_meeting(
            fields=_fields(),
            created_by=1,
            uploads={AttachmentKind.FILE: [_upload("run.sh", "text/x-sh")]},
        )
    with pytest.raises(ValidationError, match="limit"):
        service.create_meeting(
            fields=_fields(),
            created_by=1,
            uploads={AttachmentKind.IMAGE: [_upload(data=b"x" * 2048)]},
        )
    with pytest.raises(ValidationError, match="At most 5"):
        service.create_meeting(
            fields=_fields(),
            created_by=1,
            uploads={AttachmentKind.IMAGE: [_upload() for _ in range(6)]},
        )

    assert repo.rows == {}
    assert not (tmp_path / "uploads").exists()


def test_failed_attachment_rows_are_logged(service, repo, caplog):
    repo.fail_attachments = True

    with pytest.raises(RuntimeError):
        service.create_meeting(fields=_fields(), created_by=1, uploads={AttachmentKind.IMAGE: [_upload()]})

    assert "orphaned files" in caplog.text


def test_unknown_meeting(service):
    with pytest.raises(NotFoundError):
        service.get_meeting(99)
    with pytest.raises(NotFoundError):
        service.update_meeting(meeting_id=99, fields=_fields())
    with pytest.raises(NotFoundError):
        service.delete_meeting(99)
