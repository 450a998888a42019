"""
Unit tests for the analysis orchestrator.
"""
import pytest

from conftest import STRONG_RESPONSE, StubProvider
from app.llm.invoker import ModelInvoker
from app.llm.provider import ServiceError, ServiceErrorKind
from app.schemas.analysis import AnalysisRequest, ResultValidity
from app.services.analysis_service import AnalysisFailedError, AnalysisOrchestrator, PipelineStage


def _orchestrator(provider, max_resume_chars=0):
    return AnalysisOrchestrator(invoker=ModelInvoker(provider=provider, timeout_s=5), max_resume_chars=max_resume_chars)


def test_analyze_end_to_end():
    provider = StubProvider(responses=[STRONG_RESPONSE])
    result = _orchestrator(provider).analyze(
        AnalysisRequest(resume_text="5 years Python, AWS, Docker", industry="technology")
    )

    assert result.score == 85
    assert len(result.suggestions) == 1
    assert result.validity == ResultValidity.VALID

    prompt = provider.calls[0]["messages"][0]["content"]
    assert "5 years Python, AWS, Docker" in prompt
    assert "'technology' industry" in prompt


def test_unknown_industry_uses_default_keywords():
    provider = StubProvider()
    _orchestrator(provider).analyze(AnalysisRequest(resume_text="Resume", industry="astrology"))

    prompt = provider.calls[0]["messages"][0]["content"]
    assert "'technology' industry" in prompt
    assert "Kubernetes" in prompt


def test_malformed_model_output_degrades_to_fallback():
    result = _orchestrator(StubProvider(responses=["Sorry, I cannot help with that."])).analyze(
        AnalysisRequest(resume_text="Resume")
    )

    assert result.score == 0
    assert result.suggestions == []
    assert result.validity == ResultValidity.FALLBACK


def test_long_resume_is_truncated_with_marker():
    provider = StubProvider()
    _orchestrator(provider, max_resume_chars=10).analyze(AnalysisRequest(resume_text="R" * 50))

    prompt = provider.calls[0]["messages"][0]["content"]
    assert "[... resume truncated: 10 of 50 characters shown ...]" in prompt


@pytest.mark.parametrize("kind", [ServiceErrorKind.TIMEOUT, ServiceErrorKind.QUOTA, ServiceErrorKind.UNAVAILABLE])
def test_model_failure_is_a_single_explicit_error(kind):
    orchestrator = _orchestrator(StubProvider(error=ServiceError(kind, "down")))

    with pytest.raises(AnalysisFailedError) as exc_info:
        orchestrator.analyze(AnalysisRequest(resume_text="Resume"))
    assert exc_info.value.kind == kind
    assert exc_info.value.stage == PipelineStage.INVOKED


def test_optimize_returns_rewrite():
    provider = StubProvider(responses=["  Rewritten resume  "])
    optimized = _orchestrator(provider).optimize("Resume", [{"title": "Add metrics"}], "finance")

    assert optimized == "Rewritten resume"
    assert "- Add metrics" in provider.calls[0]["messages"][0]["content"]
    assert "response_format" not in provider.calls[0]


def test_empty_rewrite_fails():
    orchestrator = _orchestrator(StubProvider(responses=["   "]))

    with pytest.raises(AnalysisFailedError) as exc_info:
        orchestrator.optimize("Resume", [], "technology")
    assert exc_info.value.kind == ServiceErrorKind.REJECTED
    assert exc_info.value.stage == PipelineStage.VALIDATED


def test_blank_resume_is_rejected_by_request_schema():
    with pytest.raises(ValueError):
        AnalysisRequest(resume_text="   ")
