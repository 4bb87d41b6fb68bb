from __future__ import annotations

import logging
import os
import random
import re
from pathlib import Path
from typing import Mapping, Sequence

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..common.datetime_utils import now_local
from ..core.constants import MAX_FILE_SIZE_BYTES, MAX_FILES_PER_UPLOAD, MAX_IMAGES_PER_UPLOAD
from ..core.enums import AttachmentKind
from ..core.exceptions import NotFoundError, ValidationError
from .model import StoredFile

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = frozenset(
    {
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    }
)

# Form field each attachment kind is uploaded under.
UPLOAD_FIELDS = {AttachmentKind.IMAGE: "images", AttachmentKind.FILE: "files"}
MAX_PER_KIND = {AttachmentKind.IMAGE: MAX_IMAGES_PER_UPLOAD, AttachmentKind.FILE: MAX_FILES_PER_UPLOAD}

_SUFFIX_RE = re.compile(r"^\.[a-z0-9]{1,10}$")

Uploads = Mapping[AttachmentKind, Sequence[FileStorage]]


def _stream_size(upload: FileStorage) -> int:
    stream = upload.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


class FileStore:
    """Stores uploaded attachments on local disk under unique names."""

    def __init__(self, upload_dir: str | Path, *, max_file_size: int = MAX_FILE_SIZE_BYTES):
        self._dir = Path(upload_dir)
        self._max_file_size = int(max_file_size)

    @property
    def directory(self) -> Path:
        return self._dir

    def validate(self, uploads: Uploads) -> None:
        """Reject the whole batch before anything is written."""

        for kind, files in uploads.items():
            if len(files) > MAX_PER_KIND[kind]:
                raise ValidationError(f"At most {MAX_PER_KIND[kind]} {UPLOAD_FIELDS[kind]} per upload")
            for upload in files:
                if upload.mimetype not in ALLOWED_MIME_TYPES:
                    raise ValidationError(f"Unsupported file type: {upload.mimetype or 'unknown'}")
                if _stream_size(upload) > self._max_file_size:
                    raise ValidationError(f"{upload.filename} exceeds the {self._max_file_size // (1024 * 1024)}MB limit")

    def _unique_name(self, field: str, original: str) -> str:
        suffix = Path(original).suffix.lower()
        if not _SUFFIX_RE.match(suffix):
            suffix = ""
        stamp = int(now_local().timestamp() * 1000)
        return f"{field}-{stamp}-{random.randint(0, 10**9)}{suffix}"

    def save(self, upload: FileStorage, *, kind: AttachmentKind) -> StoredFile:
        self._dir.mkdir(parents=True, exist_ok=True)
        original = upload.filename or "upload"
        filename = self._unique_name(UPLOAD_FIELDS[kind], original)
        size = _stream_size(upload)
        upload.save(self._dir / filename)
        logger.debug("Stored %s as %s (%s bytes)", original, filename, size)
        return StoredFile(filename=filename, kind=kind, original_name=original, file_size=size)

    def save_all(self, uploads: Uploads) -> list[StoredFile]:
        stored: list[StoredFile] = []
        for kind in (AttachmentKind.IMAGE, AttachmentKind.FILE):
            for upload in uploads.get(kind, ()):
                stored.append(self.save(upload, kind=kind))
        return stored

    def path_for(self, filename: str) -> Path:
        safe = secure_filename(filename)
        path = self._dir / safe
        if not safe or safe != filename or not path.is_file():
            raise NotFoundError("File not found")
        return path

    def list_stored(self) -> list[str]:
        if not self._dir.is_dir():
            return []
        return sorted(p.name for p in self._dir.iterdir() if p.is_file())
