import shutil
from contextlib import contextmanager
from dataclasses import dataclass
from logging import Logger
from pathlib import Path
from typing import IO, Iterator, List, Optional
from uuid import uuid4

from fastapi import UploadFile

from app.core.config import get_settings
from app.core.errors import CleanupFailed
from app.core.logging import configure_logging


@dataclass
class StagedFile:
    filename: str
    content_type: str
    path: Path
    size_bytes: int


class StagingArea:
    """مساحة ملفات مؤقتة خاصة بطلب واحد؛ كل مسار تنشئه يُحذف عند الخروج."""

    def __init__(self, directory: Path, prefix: str, logger: Logger) -> None:
        self.directory = directory
        self.prefix = prefix
        self.logger = logger
        self._paths: List[Path] = []

    @property
    def paths(self) -> List[Path]:
        return list(self._paths)

    def _generate_filename(self, suffix: str) -> str:
        suffix = suffix if suffix.startswith(".") else f".{suffix.lstrip('.')}"
        return f"{self.prefix}-{uuid4().hex}{suffix}"

    def new_path(self, suffix: str = ".pdf", *, label: str = "") -> Path:
        name = self._generate_filename(suffix)
        if label:
            name = f"{label}-{name}"
        path = self.directory / name
        self._paths.append(path)
        return path

    def save_upload(self, upload: UploadFile) -> StagedFile:
        suffix = Path(upload.filename or "").suffix or ".pdf"
        target_path = self.new_path(suffix, label="upload")
        upload.file.seek(0)
        self._save_stream(upload.file, target_path)
        return StagedFile(
            filename=upload.filename or target_path.name,
            content_type=upload.content_type or "",
            path=target_path,
            size_bytes=target_path.stat().st_size,
        )

    @staticmethod
    def _save_stream(stream: IO[bytes], target_path: Path) -> None:
        with target_path.open("wb") as buffer:
            shutil.copyfileobj(stream, buffer)

    @staticmethod
    def _remove(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise CleanupFailed(path, exc) from exc

    def cleanup(self) -> None:
        while self._paths:
            path = self._paths.pop()
            try:
                self._remove(path)
            except CleanupFailed as exc:
                self.logger.warning("تعذر حذف الملف المؤقت %s: %r", exc.path, exc.reason)


class LocalStorage:
    """خدمات التخزين المحلية للملفات المؤقتة الخاصة بكل طلب."""

    def __init__(self, temp_dir: Optional[Path] = None) -> None:
        settings = get_settings()
        self.temp_dir = Path(temp_dir or settings.temp_dir)
        self.prefix = settings.slug
        self.logger = configure_logging()
        self.temp_dir.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def staging(self) -> Iterator[StagingArea]:
        area = StagingArea(self.temp_dir, self.prefix, self.logger)
        try:
            yield area
        finally:
            area.cleanup()
