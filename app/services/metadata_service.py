from __future__ import annotations

from io import BytesIO

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from app.core.errors import MetadataEditFailed
from app.core.logging import configure_logging


class MetadataService:
    """مسح البيانات الوصفية للمستند باستخدام pypdf."""

    CLEARED_FIELDS = (
        "/Title",
        "/Author",
        "/Subject",
        "/Keywords",
        "/Producer",
        "/Creator",
    )

    def __init__(self) -> None:
        self.logger = configure_logging()

    def strip(self, pdf_bytes: bytes) -> bytes:
        try:
            reader = PdfReader(BytesIO(pdf_bytes))
            writer = PdfWriter(clone_from=reader)
            writer.add_metadata({field: "" for field in self.CLEARED_FIELDS})

            buffer = BytesIO()
            writer.write(buffer)
        except (PyPdfError, ValueError, KeyError, TypeError) as exc:
            self.logger.error("تعذر مسح البيانات الوصفية للملف المضغوط: %s", exc)
            raise MetadataEditFailed() from exc

        return buffer.getvalue()
