"""
Analysis orchestrator.

Runs one request through the pipeline:
    REQUESTED -> PROMPT_BUILT -> INVOKED -> VALIDATED -> COMPLETED
The model call is the only stage allowed to fail the request; a malformed
response degrades to the validator's fallback result instead.
"""
import logging
import uuid
from enum import Enum
from functools import lru_cache
from typing import Any, Iterable, Optional

from app.core.config import MAX_RESUME_CHARS
from app.llm.invoker import ModelInvoker
from app.llm.provider import ServiceError, ServiceErrorKind
from app.schemas.analysis import AnalysisRequest, AnalysisResult, ResultValidity
from app.services.keyword_taxonomy import keywords_for, resolve_industry
from app.services.prompt_builder import build_analysis_prompt_with_report, build_optimization_prompt
from app.services.response_validator import validate_response

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    REQUESTED = "requested"
    PROMPT_BUILT = "prompt_built"
    INVOKED = "invoked"
    VALIDATED = "validated"
    COMPLETED = "completed"


class AnalysisFailedError(Exception):
    """The model service failed; the request cannot produce a result."""

    def __init__(self, stage: PipelineStage, error: ServiceError):
        self.stage = stage
        self.error = error
        super().__init__(f"Analysis failed at {stage.value}: {error}")

    @property
    def kind(self) -> ServiceErrorKind:
        return self.error.kind


class AnalysisOrchestrator:
    """Sequences taxonomy, prompt builder, model invoker and validator."""

    def __init__(self, invoker: Optional[ModelInvoker] = None, max_resume_chars: Optional[int] = None):
        self.invoker = invoker or ModelInvoker()
        self.max_resume_chars = MAX_RESUME_CHARS if max_resume_chars is None else max_resume_chars

    def _enter(self, request_id: str, stage: PipelineStage) -> PipelineStage:
        logger.debug(f"Analysis {request_id}: {stage.value}")
        return stage

    def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """
        Analyze one resume.

        Raises:
            AnalysisFailedError: the model service could not be reached,
                timed out, or rejected the request
        """
        request_id = uuid.uuid4().hex[:8]
        self._enter(request_id, PipelineStage.REQUESTED)

        industry = resolve_industry(request.industry)
        if industry.value != request.industry:
            logger.info(f"Analysis {request_id}: industry {request.industry!r} resolved to {industry.value!r}")

        built = build_analysis_prompt_with_report(
            request.resume_text,
            industry,
            keywords_for(industry),
            max_chars=self.max_resume_chars,
        )
        if built.truncated:
            logger.warning(
                f"Analysis {request_id}: resume truncated to {built.included_length} "
                f"of {built.original_length} characters"
            )
        stage = self._enter(request_id, PipelineStage.PROMPT_BUILT)

        try:
            raw_text = self.invoker.invoke(built.prompt, feature="resume_analysis")
        except ServiceError as e:
            logger.error(f"Analysis {request_id} failed at {stage.value}: {e}")
            raise AnalysisFailedError(PipelineStage.INVOKED, e) from e
        self._enter(request_id, PipelineStage.INVOKED)

        result = validate_response(raw_text)
        self._enter(request_id, PipelineStage.VALIDATED)
        if result.validity != ResultValidity.VALID:
            logger.warning(f"Analysis {request_id}: degraded result ({result.validity.value})")

        self._enter(request_id, PipelineStage.COMPLETED)
        logger.info(
            f"Analysis {request_id} completed: industry={industry.value}, score={result.score}, "
            f"suggestions={len(result.suggestions)}, skills_gap={len(result.skills_gap)}"
        )
        return result

    def optimize(self, resume_text: str, suggestions: Iterable[Any], industry: str) -> str:
        """
        Rewrite a resume applying previously generated suggestions.

        Raises:
            AnalysisFailedError: the model call failed or returned nothing
        """
        resolved = resolve_industry(industry)
        prompt = build_optimization_prompt(resume_text, suggestions, resolved, keywords_for(resolved))
        try:
            optimized = self.invoker.invoke(prompt, feature="resume_optimize", json_response=False).strip()
        except ServiceError as e:
            logger.error(f"Resume optimization failed: {e}")
            raise AnalysisFailedError(PipelineStage.INVOKED, e) from e

        if not optimized:
            error = ServiceError(ServiceErrorKind.REJECTED, "Model returned an empty rewrite")
            logger.error(f"Resume optimization failed: {error}")
            raise AnalysisFailedError(PipelineStage.VALIDATED, error)
        return optimized


@lru_cache(maxsize=1)
def get_orchestrator() -> AnalysisOrchestrator:
    """FastAPI dependency returning the process-wide orchestrator."""
    return AnalysisOrchestrator()
