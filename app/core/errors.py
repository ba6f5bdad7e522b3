"""
أخطاء خط معالجة الضغط.

كل خطأ يحمل رمز حالة HTTP ورسالة آمنة للعرض على العميل فقط؛
تفاصيل الأداة الخارجية والمسارات تبقى في السجلات.
"""

from typing import Any, Dict, Optional

GENERIC_FAILURE_MESSAGE = "An error occurred during compression."


class PDFMagicError(Exception):
    """الأصل المشترك لأخطاء الخدمة."""

    status_code: int = 500
    default_message: str = GENERIC_FAILURE_MESSAGE

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class InvalidInput(PDFMagicError):
    """ملف مفقود أو نوع MIME لا يدل على PDF."""

    status_code = 400
    default_message = "Please upload a valid PDF file."


class CompressionFailed(PDFMagicError):
    """فشل Ghostscript أو غياب ملف الإخراج."""


class MetadataEditFailed(PDFMagicError):
    """تعذر تحليل الملف المضغوط أو إعادة كتابته."""


class CleanupFailed(PDFMagicError):
    """فشل حذف ملف مؤقت؛ يُسجل فقط ولا يصل إلى العميل."""

    def __init__(self, path: Any, reason: Optional[BaseException] = None):
        super().__init__(details={"path": str(path), "reason": repr(reason)})
        self.path = path
        self.reason = reason
