import json
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """إعدادات التطبيق العامة مع تحميل القيم من ملف .env عند توفره."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "PDFMagic"
    app_version: str = "0.1.0"

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    base_dir: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[2])
    public_dir: Optional[Path] = None
    temp_dir: Optional[Path] = None

    ghostscript_binary: str = "gs"
    ghostscript_timeout: float = Field(default=120.0, gt=0)
    max_concurrent_compressions: int = Field(default=4, ge=1)

    download_filename: str = "PDFMagic.pdf"

    allow_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])

    @field_validator("allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        # يدعم "a,b,c" أو JSON list مثل '["a","b"]'
        if not isinstance(value, str):
            return value
        text = value.strip()
        if text.startswith("["):
            return [str(x).strip() for x in json.loads(text) if str(x).strip()]
        return [x.strip() for x in text.split(",") if x.strip()] or ["*"]

    @property
    def slug(self) -> str:
        return self.app_name.strip().lower().replace(" ", "-") or "pdfmagic"

    def configure_paths(self) -> None:
        """تهيئة المسارات الافتراضية وإنشاء المجلدات في حال غيابها."""
        self.public_dir = (self.public_dir or (self.base_dir / "public")).resolve()
        self.temp_dir = (self.temp_dir or Path(tempfile.gettempdir())).resolve()

        for directory in (self.public_dir, self.temp_dir):
            directory.mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    settings.configure_paths()
    return settings
