"""
File Upload Utility - store resumes and profile images on local disk.

Supported formats:
- Resume: PDF (.pdf), Word (.doc, .docx), max 5MB by default
- Profile image: JPEG (.jpeg, .jpg), PNG (.png), GIF (.gif)

Stored files are served by the app under /uploads; records only keep the
returned reference string, e.g. "/uploads/resume-1718000000000-123456789.pdf".
"""

import logging
import os
import random
import time
from typing import Optional, Set
from fastapi import Request, UploadFile

from internship_portal.core.errors import StorageError

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"

RESUME_EXTENSIONS = {'.pdf', '.doc', '.docx'}
RESUME_MIME_TYPES = {
    'application/pdf',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
}

IMAGE_EXTENSIONS = {'.jpeg', '.jpg', '.png', '.gif'}
IMAGE_MIME_TYPES = {'image/jpeg', 'image/jpg', 'image/png', 'image/gif'}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


class BlobStorage:
    """
    Writes validated uploads into upload_dir.

    Both the extension and the declared content type must be allowed;
    anything else raises StorageError before a byte is written.
    """

    def __init__(self, upload_dir: str, max_resume_size_bytes: int):
        self.upload_dir = upload_dir
        self.max_resume_size_bytes = max_resume_size_bytes
        os.makedirs(self.upload_dir, exist_ok=True)

    async def save_resume(self, file: UploadFile, prefix: str) -> str:
        return await self._save(
            file, prefix,
            extensions=RESUME_EXTENSIONS,
            mime_types=RESUME_MIME_TYPES,
            type_error="Only PDF, DOC, and DOCX files are allowed for resume!",
            max_bytes=self.max_resume_size_bytes
        )

    async def save_image(self, file: UploadFile, prefix: str) -> str:
        return await self._save(
            file, prefix,
            extensions=IMAGE_EXTENSIONS,
            mime_types=IMAGE_MIME_TYPES,
            type_error="Only JPEG, JPG, PNG, and GIF files are allowed for profile image!"
        )

    async def _save(
        self,
        file: UploadFile,
        prefix: str,
        extensions: Set[str],
        mime_types: Set[str],
        type_error: str,
        max_bytes: Optional[int] = None
    ) -> str:
        if not file.filename:
            raise StorageError("No filename provided")

        ext = get_file_extension(file.filename)
        content_type = (file.content_type or '').lower()
        if ext not in extensions or content_type not in mime_types:
            raise StorageError(type_error)

        content = await file.read()

        if max_bytes is not None and len(content) > max_bytes:
            raise StorageError(f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB.")

        filename = self._unique_name(prefix, ext)
        path = os.path.join(self.upload_dir, filename)
        with open(path, 'wb') as out:
            out.write(content)

        logger.info("Stored upload %s (%d bytes)", filename, len(content))
        return f"{UPLOADS_URL_PREFIX}/{filename}"

    def delete(self, url: str) -> None:
        """Remove a file previously returned by save_resume/save_image."""
        filename = os.path.basename(url)
        path = os.path.join(self.upload_dir, filename)
        try:
            os.remove(path)
        except FileNotFoundError:
            return
        logger.info("Removed upload %s", filename)

    @staticmethod
    def _unique_name(prefix: str, ext: str) -> str:
        stamp = int(time.time() * 1000)
        suffix = random.randint(0, 10 ** 9)
        return f"{prefix}-{stamp}-{suffix}{ext}"


def get_storage(request: Request) -> BlobStorage:
    """Dependency - the app's blob storage."""
    return request.app.state.storage
