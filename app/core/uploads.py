"""
Poster image intake and the file-backed content store.

Uploads are checked for MIME type and size before anything touches the
database, then written under a random name and referenced by path.
"""

import logging
import os
import re
import tempfile
import uuid
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from app.core.exceptions import StorageFailure, UploadRejected

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_URL_PREFIX = "/uploads"

_EXTENSION = re.compile(r"^\.[a-z0-9]{1,10}$")


@dataclass(frozen=True)
class ImageUpload:
    """An accepted image upload, held in memory until it is stored."""

    filename: str
    content_type: str
    data: bytes


async def read_upload(
    upload_file: UploadFile | None,
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> ImageUpload | None:
    """
    Validate and read an uploaded file.

    Args:
        upload_file: File part from a multipart request, or None
        max_bytes: Largest accepted payload size

    Returns:
        ImageUpload, or None when no file was chosen

    Raises:
        UploadRejected: If the declared type is not an image or the file is too large
    """
    if upload_file is None or not upload_file.filename:
        return None

    content_type = upload_file.content_type or ""
    if not content_type.startswith("image/"):
        logger.warning("Rejected upload %r with type %r", upload_file.filename, content_type)
        raise UploadRejected("Only image files are allowed!")

    data = await upload_file.read(max_bytes + 1)
    if len(data) > max_bytes:
        logger.warning("Rejected upload %r larger than %d bytes", upload_file.filename, max_bytes)
        raise UploadRejected("File too large", status_code=413)

    return ImageUpload(filename=upload_file.filename, content_type=content_type, data=data)


class ImageStore:
    """Directory of uploaded poster images, served read-only under url_prefix."""

    def __init__(self, directory: str | Path, url_prefix: str = DEFAULT_URL_PREFIX):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")

    def generate_filename(self, original_filename: str) -> str:
        """Random file name keeping the original extension when it is sane."""
        extension = os.path.splitext(original_filename)[1].lower()
        if not _EXTENSION.match(extension):
            extension = ""
        return f"{uuid.uuid4().hex}{extension}"

    def path_for(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def save(self, upload: ImageUpload) -> str:
        """
        Durably write an image and return the path records should reference.

        The file is written to a temporary name, flushed to disk and renamed,
        so a reader never sees a partial image.

        Raises:
            StorageFailure: If the file could not be written
        """
        filename = self.generate_filename(upload.filename)
        temp_path = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=self.directory, prefix=".upload-", delete=False
            ) as handle:
                temp_path = handle.name
                handle.write(upload.data)
                handle.flush()
                os.fsync(handle.fileno())
            # NamedTemporaryFile is created owner-only; images are served read-only
            os.chmod(temp_path, 0o644)
            os.replace(temp_path, self.directory / filename)
        except OSError as exc:
            logger.exception("Error storing image %r", upload.filename)
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)
            raise StorageFailure("Failed to store image") from exc

        logger.info("Stored image %r as %s", upload.filename, filename)
        return self.path_for(filename)

    def discard(self, image_path: str) -> None:
        """Remove a file previously returned by save(). Other paths are ignored."""
        prefix = f"{self.url_prefix}/"
        if not image_path.startswith(prefix):
            return
        filename = image_path[len(prefix):]
        if not filename or "/" in filename or filename.startswith("."):
            return
        try:
            (self.directory / filename).unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove stored image %s", filename, exc_info=True)
