from .common import ErrorResponse, HealthResponse
from .compress import CompressionProfile, CompressionRequest

__all__ = [
    "CompressionProfile",
    "CompressionRequest",
    "ErrorResponse",
    "HealthResponse",
]
