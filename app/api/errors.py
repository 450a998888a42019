"""
Translation of service-layer failures into HTTP errors.
"""
import logging
from typing import NoReturn
from fastapi import HTTPException, status

from app.llm.provider import ServiceErrorKind
from app.services.analysis_service import AnalysisFailedError
from app.services.stats_service import StatsConflictError

logger = logging.getLogger(__name__)

AI_ERROR_MESSAGES = {
    ServiceErrorKind.TIMEOUT: "AI service did not respond in time. Please try again later.",
    ServiceErrorKind.UNAVAILABLE: "AI service temporarily unavailable. Please try again later.",
    ServiceErrorKind.QUOTA: "AI service quota exceeded. Please try again later.",
    ServiceErrorKind.REJECTED: "AI service rejected the request.",
    ServiceErrorKind.NOT_CONFIGURED: "AI service is not configured.",
}


def raise_for_analysis_failure(error: AnalysisFailedError) -> NoReturn:
    """504 for model timeouts, 502 for every other model service failure."""
    status_code = (
        status.HTTP_504_GATEWAY_TIMEOUT
        if error.kind == ServiceErrorKind.TIMEOUT
        else status.HTTP_502_BAD_GATEWAY
    )
    raise HTTPException(
        status_code=status_code,
        detail={
            "error": "ai_service_error",
            "kind": error.kind.value,
            "message": AI_ERROR_MESSAGES[error.kind],
        }
    ) from error


def raise_for_stats_conflict(error: StatsConflictError) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={
            "error": "stats_conflict",
            "message": "Your result was saved, but statistics could not be updated. Please retry.",
        }
    ) from error
