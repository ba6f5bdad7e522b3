from fastapi import APIRouter

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.models import HealthResponse

router = APIRouter(tags=["Health"])

logger = configure_logging()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    logger.debug("Health check invoked")
    settings = get_settings()
    return HealthResponse(status="ok", message=f"{settings.app_name} API is running")
