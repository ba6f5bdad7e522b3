from typing import Optional

from fastapi import UploadFile

from app.core.errors import InvalidInput

BYTES_PER_MB = 1024 * 1024


def ensure_pdf(upload: Optional[UploadFile]) -> UploadFile:
    """التحقق من وجود ملف مرفوع وأن نوعه المعلن PDF."""
    if upload is None or not upload.filename:
        raise InvalidInput()

    content_type = (upload.content_type or "").lower()
    if "pdf" not in content_type:
        raise InvalidInput()

    return upload


def size_in_mb(size_bytes: int) -> float:
    return size_bytes / BYTES_PER_MB
