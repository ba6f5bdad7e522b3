from typing import Optional

from fastapi import APIRouter, File, Form, Response, UploadFile
from starlette.concurrency import run_in_threadpool

from app.core.config import get_settings
from app.core.errors import CompressionFailed, PDFMagicError
from app.core.logging import configure_logging
from app.models import CompressionRequest, ErrorResponse
from app.services.compression_service import CompressedArtifact, CompressionService
from app.services.metadata_service import MetadataService
from app.storage.local import LocalStorage
from app.utils.file_utils import ensure_pdf

router = APIRouter(tags=["PDF Compression"])

settings = get_settings()
logger = configure_logging()
storage = LocalStorage()
compression_service = CompressionService()
metadata_service = MetadataService()


def _check_target_size(options: CompressionRequest, artifact: CompressedArtifact) -> None:
    # تحذير فقط: لا إعادة محاولة ولا رفض للطلب
    if options.target_size_mb is None:
        return
    if artifact.size_mb > options.target_size_mb:
        logger.warning(
            "لم يتحقق الحجم المستهدف بالكامل: %.2f MB (المستهدف %.2f MB)",
            artifact.size_mb,
            options.target_size_mb,
        )


@router.post(
    "/compress",
    summary="ضغط ملف PDF عبر Ghostscript وإرجاع الملف الناتج",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def compress_pdf(
    pdf: Optional[UploadFile] = File(default=None),
    target_size: Optional[str] = Form(default=None, alias="targetSize"),
    quality: Optional[str] = Form(default=None),
    optimize_images: Optional[str] = Form(default=None, alias="optimizeImages"),
    remove_metadata: Optional[str] = Form(default=None, alias="removeMetadata"),
    downsample_images: Optional[str] = Form(default=None, alias="downsampleImages"),
) -> Response:
    upload = ensure_pdf(pdf)
    options = CompressionRequest.from_form(
        target_size=target_size,
        quality=quality,
        optimize_images=optimize_images,
        downsample_images=downsample_images,
        remove_metadata=remove_metadata,
    )
    logger.info("تم استلام ملف للضغط: %s (المستوى %s)", upload.filename, options.profile.value)

    try:
        with storage.staging() as staging:
            staged = await run_in_threadpool(staging.save_upload, upload)
            output_path = staging.new_path(".pdf", label="compressed")

            artifact = await run_in_threadpool(compression_service.compress, staged.path, output_path, options)

            if options.remove_metadata:
                artifact.data = await run_in_threadpool(metadata_service.strip, artifact.data)

            _check_target_size(options, artifact)
    except PDFMagicError:
        raise
    except Exception as exc:
        logger.exception("خطأ غير متوقع أثناء ضغط الملف %s", upload.filename)
        raise CompressionFailed() from exc

    logger.info(
        "اكتملت عملية الضغط للملف %s: %s -> %s بايت",
        upload.filename,
        staged.size_bytes,
        len(artifact.data),
    )

    return Response(
        content=artifact.data,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={settings.download_filename}"},
    )
