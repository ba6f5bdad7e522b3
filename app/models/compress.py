from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CompressionProfile(str, Enum):
    """إعدادات Ghostscript الجاهزة مرتبة من الأصغر حجمًا إلى الأعلى جودة."""

    screen = "screen"
    printer = "printer"
    prepress = "prepress"

    @property
    def pdf_settings(self) -> str:
        return f"/{self.value}"

    @classmethod
    def from_quality(cls, quality: Optional[int]) -> "CompressionProfile":
        # القيمة المفقودة أو غير الرقمية تعود إلى printer
        if quality is None:
            return cls.printer
        if quality <= 33:
            return cls.screen
        if quality <= 66:
            return cls.printer
        return cls.prepress


def parse_flag(value: Optional[str]) -> bool:
    """الحقول المنطقية تصل كنصوص "true"/"false"؛ أي قيمة أخرى تعني False."""
    if value is None:
        return False
    return value.strip().lower() == "true"


def parse_quality(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned:
        return None
    try:
        return int(cleaned)
    except ValueError:
        pass
    try:
        number = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def parse_target_size(value: Optional[str]) -> Optional[float]:
    """الحجم المستهدف بالميغابايت؛ يُهمل إن لم يكن رقمًا موجبًا."""
    if value is None:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


class CompressionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_size_mb: Optional[float] = Field(default=None, description="الحجم المستهدف بالميغابايت (إرشادي فقط).")
    quality_level: Optional[int] = Field(default=None, description="مستوى الجودة من 0 إلى 100.")
    optimize_images: bool = Field(default=False, description="تقليل دقة الصور الملونة إلى 150 DPI بطريقة Bicubic.")
    downsample_images: bool = Field(default=False, description="فرض تقليل دقة الصور الملونة إلى 72 DPI.")
    remove_metadata: bool = Field(default=False, description="مسح بيانات المستند الوصفية بعد الضغط.")

    @classmethod
    def from_form(
        cls,
        *,
        target_size: Optional[str] = None,
        quality: Optional[str] = None,
        optimize_images: Optional[str] = None,
        downsample_images: Optional[str] = None,
        remove_metadata: Optional[str] = None,
    ) -> "CompressionRequest":
        return cls(
            target_size_mb=parse_target_size(target_size),
            quality_level=parse_quality(quality),
            optimize_images=parse_flag(optimize_images),
            downsample_images=parse_flag(downsample_images),
            remove_metadata=parse_flag(remove_metadata),
        )

    @property
    def profile(self) -> CompressionProfile:
        return CompressionProfile.from_quality(self.quality_level)
