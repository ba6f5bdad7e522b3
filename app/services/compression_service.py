from __future__ import annotations

import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List

from app.core.config import get_settings
from app.core.errors import CompressionFailed
from app.core.logging import configure_logging
from app.models import CompressionRequest
from app.utils.file_utils import size_in_mb


@dataclass
class CompressedArtifact:
    path: Path
    data: bytes

    @property
    def size_mb(self) -> float:
        return size_in_mb(len(self.data))


class CompressionService:
    """ضغط ملفات PDF عبر Ghostscript (جهاز pdfwrite) وفق مستوى الجودة المطلوب."""

    BASE_ARGUMENTS = (
        "-sDEVICE=pdfwrite",
        "-dCompatibilityLevel=1.4",
    )
    BATCH_ARGUMENTS = (
        "-dNOPAUSE",
        "-dQUIET",
        "-dBATCH",
    )
    OPTIMIZE_IMAGE_ARGUMENTS = (
        "-dColorImageDownsampleType=/Bicubic",
        "-dColorImageResolution=150",
    )
    DOWNSAMPLE_IMAGE_ARGUMENTS = (
        "-dDownsampleColorImages=true",
        "-dColorImageResolution=72",
    )

    def __init__(
        self,
        binary: str | None = None,
        timeout: float | None = None,
        max_concurrent: int | None = None,
    ) -> None:
        settings = get_settings()
        self.binary = binary or settings.ghostscript_binary
        self.timeout = timeout or settings.ghostscript_timeout
        self.logger = configure_logging()
        self._slots = threading.BoundedSemaphore(max_concurrent or settings.max_concurrent_compressions)

    def build_arguments(self, options: CompressionRequest, input_path: Path, output_path: Path) -> List[str]:
        """
        بناء وسائط Ghostscript بالترتيب الثابت.

        وسائط 72 DPI تأتي بعد وسائط 150 DPI، وGhostscript يعتمد آخر تعريف
        لـ ColorImageResolution، لذا تفوز 72 DPI عند تفعيل الخيارين معًا.
        """
        arguments = [
            *self.BASE_ARGUMENTS,
            f"-dPDFSETTINGS={options.profile.pdf_settings}",
            *self.BATCH_ARGUMENTS,
        ]
        if options.optimize_images:
            arguments.extend(self.OPTIMIZE_IMAGE_ARGUMENTS)
        if options.downsample_images:
            arguments.extend(self.DOWNSAMPLE_IMAGE_ARGUMENTS)

        arguments.extend([f"-sOutputFile={output_path}", str(input_path)])
        return arguments

    def compress(self, input_path: Path, output_path: Path, options: CompressionRequest) -> CompressedArtifact:
        command = [self.binary, *self.build_arguments(options, input_path, output_path)]

        with self._slots:
            self._run(command)

        if not output_path.exists() or output_path.stat().st_size == 0:
            self.logger.error("لم ينتج Ghostscript ملف إخراج: %s", output_path)
            raise CompressionFailed()

        return CompressedArtifact(path=output_path, data=output_path.read_bytes())

    def _run(self, command: List[str]) -> None:
        try:
            subprocess.run(
                command,
                check=True,
                timeout=self.timeout,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except subprocess.TimeoutExpired as exc:
            self.logger.error("انتهت مهلة Ghostscript بعد %s ثانية", self.timeout)
            raise CompressionFailed() from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or b"").decode("utf-8", errors="replace").strip()
            self.logger.error("فشل Ghostscript برمز الخروج %s: %s", exc.returncode, stderr)
            raise CompressionFailed() from exc
        except OSError as exc:
            self.logger.error("تعذر تشغيل Ghostscript (%s): %s", self.binary, exc)
            raise CompressionFailed() from exc
