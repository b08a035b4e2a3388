"""Local filesystem storage for admin image uploads.

Storage layout:
    <upload_dir>/uploads/upload_<epoch_ms>_<rand6>.<ext>

Files are served back by the app under ``/uploads/<filename>``.
"""

import logging
import secrets
import string
import time
from dataclasses import dataclass
from pathlib import Path

from yardpass.domain.exceptions import UploadRejectedError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}
UPLOADS_SUBDIR = "uploads"
PUBLIC_URL_PREFIX = "/uploads"

_RANDOM_ALPHABET = string.ascii_lowercase + string.digits


@dataclass
class StoredFile:
    """Result of storing a single file on disk."""

    stored_path: str
    pathname: str
    url: str
    filename: str
    file_size: int
    mime_type: str


def _random_suffix(length: int = 6) -> str:
    return "".join(secrets.choice(_RANDOM_ALPHABET) for _ in range(length))


class LocalFileStorage:
    """Infrastructure adapter for local file storage."""

    def __init__(self, upload_dir: str, max_bytes: int = 10 * 1024 * 1024):
        self._upload_dir = Path(upload_dir)
        self._max_bytes = max_bytes

    @property
    def files_dir(self) -> Path:
        return self._upload_dir / UPLOADS_SUBDIR

    def check_upload(self, mime_type: str, size: int) -> None:
        """Raise UploadRejectedError unless the file is an allowed image under the size cap."""
        if mime_type not in ALLOWED_IMAGE_TYPES:
            raise UploadRejectedError("Invalid file type. Allowed: JPEG, PNG, WebP, GIF")
        if size > self._max_bytes:
            max_mb = self._max_bytes // (1024 * 1024)
            raise UploadRejectedError(f"File too large. Max {max_mb}MB")

    async def store_upload(self, content: bytes, original_name: str, mime_type: str) -> StoredFile:
        """Validate and store an uploaded image.

        The stored name is ``upload_<epoch_ms>_<rand6>.<ext>``, never the
        client's filename, and the extension always follows the checked
        MIME type so the file is served back as that image type.
        """
        self.check_upload(mime_type, len(content))

        self.files_dir.mkdir(parents=True, exist_ok=True)
        filename = f"upload_{int(time.time() * 1000)}_{_random_suffix()}.{ALLOWED_IMAGE_TYPES[mime_type]}"
        dest_path = self.files_dir / filename
        dest_path.write_bytes(content)

        logger.info("Stored upload %r as %s (%d bytes)", original_name, dest_path, len(content))

        return StoredFile(
            stored_path=str(dest_path),
            pathname=f"{UPLOADS_SUBDIR}/{filename}",
            url=f"{PUBLIC_URL_PREFIX}/{filename}",
            filename=filename,
            file_size=len(content),
            mime_type=mime_type,
        )

