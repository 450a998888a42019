"""
Unit tests for model response validation.
Malformed output must degrade to a well-typed result, never raise.
"""
import json

import pytest

from app.schemas.analysis import ResultValidity
from app.services.response_validator import (
    FALLBACK_SUMMARY,
    coerce_score,
    validate_response,
)


def _response(**fields) -> str:
    payload = {"score": 70, "analysis": {"summary": "ok"}, "suggestions": [], "skillsGap": []}
    payload.update(fields)
    return json.dumps(payload)


@pytest.mark.parametrize("raw", ["not json", "", "{", "[1, 2, 3]", "null", "42", None, b"{}"])
def test_malformed_response_returns_fallback(raw):
    result = validate_response(raw)

    assert result.score == 0
    assert result.analysis == {"summary": FALLBACK_SUMMARY}
    assert result.suggestions == []
    assert result.skills_gap == []
    assert result.validity == ResultValidity.FALLBACK


def test_well_formed_response():
    raw = '{"score": 85, "analysis": {"summary":"Strong"}, "suggestions": ["Add metrics"], "skillsGap": []}'
    result = validate_response(raw)

    assert result.score == 85
    assert len(result.suggestions) == 1
    assert result.suggestions[0].title == "Add metrics"
    assert result.analysis == {"summary": "Strong"}
    assert result.validity == ResultValidity.VALID


@pytest.mark.parametrize("score, expected", [
    (-5, 0), (150, 100), (0, 0), (100, 100), (72.5, 73), (10**30, 100), (float("inf"), 100), (float("-inf"), 0),
])
def test_score_is_clamped(score, expected):
    result = validate_response(_response(score=score))
    assert result.score == expected
    assert result.validity == ResultValidity.VALID


def test_nan_score_becomes_zero():
    # json.dumps writes NaN, and json.loads accepts it
    result = validate_response(_response(score=float("nan")))
    assert result.score == 0
    assert result.validity == ResultValidity.SCORE_COERCED


@pytest.mark.parametrize("score", ["85", None, True, [85], {"value": 85}])
def test_non_numeric_score_is_coerced_but_rest_is_kept(score):
    result = validate_response(_response(score=score, suggestions=["Add metrics"]))

    assert result.score == 0
    assert result.validity == ResultValidity.SCORE_COERCED
    assert len(result.suggestions) == 1
    assert result.analysis == {"summary": "ok"}


def test_missing_score_is_coerced():
    result = validate_response('{"analysis": {"summary": "no score"}}')
    assert result.score == 0
    assert result.validity == ResultValidity.SCORE_COERCED


def test_non_list_collections_become_empty():
    result = validate_response(_response(suggestions="Add metrics", skillsGap={"skill": "AWS"}))
    assert result.suggestions == []
    assert result.skills_gap == []


def test_fenced_json_is_unwrapped():
    raw = "```json\n" + _response(score=64) + "\n```"
    assert validate_response(raw).score == 64


def test_suggestion_records_are_normalized():
    result = validate_response(_response(suggestions=[
        {
            "type": "QUANTIFY",
            "title": "Quantify achievements",
            "description": "Use numbers",
            "priority": "high",
            "effort": "trivial",
            "keywords": ["metrics", 7],
            "beforeExample": "Improved sales",
            "afterExample": "Improved sales by 30%",
        },
        {"type": "unknown", "description": "Only a description"},
        {"priority": "high"},
        17,
    ]))

    assert len(result.suggestions) == 2
    first, second = result.suggestions
    assert first.id == 1
    assert first.type == "quantify"
    assert first.priority == "high"
    assert first.impact == "high"
    assert first.effort == "moderate"
    assert first.keywords == ["metrics"]
    assert first.after_example == "Improved sales by 30%"
    assert second.id == 2
    assert second.type == "content"
    assert second.title == "Only a description"


def test_skill_gap_levels_are_clamped():
    result = validate_response(_response(skillsGap=[
        {"skill": "Kubernetes", "currentLevel": -3, "targetLevel": 14, "importance": 7.5, "marketDemand": "high"},
        {"name": "Terraform"},
        "GraphQL",
        {"currentLevel": 4},
    ]))

    assert [entry.skill for entry in result.skills_gap] == ["Kubernetes", "Terraform", "GraphQL"]
    kubernetes = result.skills_gap[0]
    assert kubernetes.current_level == 0
    assert kubernetes.target_level == 10
    assert kubernetes.importance == 8
    assert kubernetes.market_demand == 5


def test_analysis_string_becomes_summary():
    result = validate_response(_response(analysis="Solid resume"))
    assert result.analysis == {"summary": "Solid resume"}


def test_payload_uses_caller_facing_names():
    payload = validate_response(_response(skillsGap=[{"skill": "AWS", "currentLevel": 3}])).to_payload()

    assert set(payload) == {"score", "analysis", "suggestions", "skillsGap"}
    assert payload["skillsGap"][0]["currentLevel"] == 3
    assert "targetLevel" in payload["skillsGap"][0]


def test_result_is_immutable():
    result = validate_response(_response())
    with pytest.raises(Exception):
        result.score = 99


def test_coerce_score_reports_coercion():
    assert coerce_score(55) == (55, False)
    assert coerce_score(-1.2) == (0, False)
    assert coerce_score("55") == (0, True)
    assert coerce_score(float("nan")) == (0, True)
