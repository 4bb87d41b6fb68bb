from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Attachment, Meeting, MeetingFilters, MeetingInput, StoredFile


class MeetingRepository(Protocol):
    def list_page(self, *, filters: MeetingFilters, limit: int, offset: int) -> Sequence[Meeting]:
        """Newest first: meeting_date DESC, meeting_time DESC."""

        raise NotImplementedError

    def count(self, *, filters: MeetingFilters) -> int:
        """Row count for the same predicate list_page uses."""

        raise NotImplementedError

    def get_by_id(self, meeting_id: int) -> Optional[Meeting]:
        raise NotImplementedError

    def create(self, *, data: MeetingInput, created_by: int) -> int:
        raise NotImplementedError

    def update(self, *, meeting_id: int, data: MeetingInput) -> bool:
        raise NotImplementedError

    def delete(self, *, meeting_id: int) -> bool:
        raise NotImplementedError

    def add_attachments(self, *, meeting_id: int, files: Sequence[StoredFile]) -> None:
        raise NotImplementedError

    def list_attachments(self, *, meeting_id: int) -> Sequence[Attachment]:
        raise NotImplementedError
