from .schemas import (
    AnalysisResultEntry,
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    HealthResponse,
    StatusEnum,
)

__all__ = [
    "AnalysisResultEntry",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "ErrorResponse",
    "HealthResponse",
    "StatusEnum",
]
