from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import routers
from app.core.config import get_settings
from app.core.errors import GENERIC_FAILURE_MESSAGE, InvalidInput, PDFMagicError
from app.core.logging import configure_logging

# === إعدادات وتسجيل ===
settings = get_settings()
logger = configure_logging()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
)


# === CORS ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],  # لقراءة اسم الملف من الهيدر
)


# === معالجة الأخطاء ===
# كل الأخطاء تنتهي إلى جسم JSON موحد {"error": "..."} دون تفاصيل داخلية.
@app.exception_handler(PDFMagicError)
async def pdfmagic_error_handler(request: Request, exc: PDFMagicError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("فشل الطلب %s %s: %s", request.method, request.url.path, exc.__class__.__name__)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("طلب غير صالح على %s: %s", request.url.path, exc.errors())
    error = InvalidInput()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if exc.status_code < 500 else GENERIC_FAILURE_MESSAGE
    return JSONResponse(status_code=exc.status_code, content={"error": str(message)}, headers=exc.headers)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("خطأ غير متوقع على %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": GENERIC_FAILURE_MESSAGE})


# === Routers ===
for router in routers:
    app.include_router(router)

# === نموذج الرفع الثابت ===
# يُركب بعد الموجهات حتى لا يحجب /compress و /health
public_dir: Path = settings.public_dir
app.mount("/", StaticFiles(directory=str(public_dir), html=True), name="public")


def run() -> None:
    import uvicorn

    logger.info("Server running on http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
