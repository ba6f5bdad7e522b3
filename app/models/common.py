from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(..., description="رسالة خطأ عامة لا تتضمن تفاصيل داخلية.")


class HealthResponse(BaseModel):
    status: str
    message: str
