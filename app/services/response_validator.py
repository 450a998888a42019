"""
Validation of raw model output against the analysis contract.

validate_response() is total: whatever the model returns, the caller gets a
well-typed AnalysisResult. Unparseable output degrades to the fallback result;
partially valid output keeps what can be salvaged.
"""
import json
import logging
import math
import re
from typing import Any, Dict, List, Optional, Tuple, get_args

from app.schemas.analysis import (
    AnalysisResult,
    Effort,
    Level,
    ResultValidity,
    SkillGapEntry,
    Suggestion,
    SuggestionType,
)
from app.services.scoring import SKILL_LEVEL_MIN, SKILL_LEVEL_MAX, clamp, clamp_score, round_half_up

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY = "AI response was invalid"

SUGGESTION_TYPES = get_args(SuggestionType)
LEVELS = get_args(Level)
EFFORTS = get_args(Effort)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def fallback_result() -> AnalysisResult:
    return AnalysisResult(
        score=0,
        analysis={"summary": FALLBACK_SUMMARY},
        suggestions=[],
        skills_gap=[],
        validity=ResultValidity.FALLBACK,
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _choice(value: Any, allowed: Tuple[str, ...], default: str) -> str:
    normalized = _text(value).lower()
    return normalized if normalized in allowed else default


def _parse_object(raw_text: Any) -> Optional[Dict[str, Any]]:
    """Parse raw text as a JSON object, unwrapping a markdown code fence. None if impossible."""
    if not isinstance(raw_text, str) or not raw_text.strip():
        return None
    text = raw_text.strip()
    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def coerce_score(value: Any) -> Tuple[int, bool]:
    """
    Normalize a model score into [0, 100].

    Returns:
        (score, coerced) where coerced is True when the value was missing,
        non-numeric or NaN and therefore replaced by 0
    """
    if not _is_number(value):
        return 0, True
    if isinstance(value, int):
        # Integers may be too large for float()
        return int(clamp(value, 0, 100)), False
    if math.isnan(value):
        return 0, True
    return clamp_score(value), False


def _coerce_analysis(value: Any) -> Dict[str, Any]:
    if isinstance(value, str):
        return {"summary": value}
    if not isinstance(value, dict):
        return {}
    analysis = dict(value)
    for key in ("strengths", "improvements"):
        if key in analysis:
            items = analysis[key] if isinstance(analysis[key], list) else []
            analysis[key] = [item for item in items if isinstance(item, str)]
    if "summary" in analysis and not isinstance(analysis["summary"], str):
        analysis["summary"] = str(analysis["summary"])
    return analysis


def _suggestion_from_item(item: Any, position: int) -> Optional[Suggestion]:
    if isinstance(item, str):
        title = item.strip()
        if not title:
            return None
        return Suggestion(id=position, title=title, description=title)

    if not isinstance(item, dict):
        return None

    title = _text(item.get("title")) or _text(item.get("description"))
    if not title:
        return None

    priority = _choice(item.get("priority"), LEVELS, "medium")
    raw_id = item.get("id")
    keywords = item.get("keywords") if isinstance(item.get("keywords"), list) else []

    return Suggestion(
        id=raw_id if isinstance(raw_id, int) and not isinstance(raw_id, bool) and raw_id > 0 else position,
        type=_choice(item.get("type"), SUGGESTION_TYPES, "content"),
        title=title,
        description=_text(item.get("description")) or title,
        priority=priority,
        impact=_choice(item.get("impact"), LEVELS, priority),
        effort=_choice(item.get("effort"), EFFORTS, "moderate"),
        category=_text(item.get("category")) or None,
        keywords=[k for k in keywords if isinstance(k, str)],
        before_example=_text(item.get("beforeExample")) or None,
        after_example=_text(item.get("afterExample")) or None,
    )


def _coerce_suggestions(value: Any) -> List[Suggestion]:
    if not isinstance(value, list):
        return []
    suggestions = []
    for item in value:
        suggestion = _suggestion_from_item(item, len(suggestions) + 1)
        if suggestion is not None:
            suggestions.append(suggestion)
    return suggestions


def _level(value: Any, default: int) -> int:
    if not _is_number(value):
        return default
    if isinstance(value, int):
        return int(clamp(value, SKILL_LEVEL_MIN, SKILL_LEVEL_MAX))
    if math.isnan(value):
        return default
    return round_half_up(clamp(value, SKILL_LEVEL_MIN, SKILL_LEVEL_MAX))


def _skill_gap_from_item(item: Any) -> Optional[SkillGapEntry]:
    if isinstance(item, str):
        return SkillGapEntry(skill=item.strip()) if item.strip() else None
    if not isinstance(item, dict):
        return None
    skill = _text(item.get("skill")) or _text(item.get("name"))
    if not skill:
        return None
    return SkillGapEntry(
        skill=skill,
        current_level=_level(item.get("currentLevel"), SKILL_LEVEL_MIN),
        target_level=_level(item.get("targetLevel"), SKILL_LEVEL_MAX),
        importance=_level(item.get("importance"), 5),
        market_demand=_level(item.get("marketDemand"), 5),
    )


def _coerce_skills_gap(value: Any) -> List[SkillGapEntry]:
    if not isinstance(value, list):
        return []
    entries = (_skill_gap_from_item(item) for item in value)
    return [entry for entry in entries if entry is not None]


def validate_response(raw_text: Any) -> AnalysisResult:
    """
    Turn raw model output into an AnalysisResult. Never raises.

    - unparseable or non-object JSON -> fallback result (score 0)
    - missing / non-numeric / NaN score -> 0
    - score outside [0, 100] -> clamped
    - non-list suggestions / skillsGap -> empty lists
    """
    parsed = _parse_object(raw_text)
    if parsed is None:
        preview = raw_text[:100] if isinstance(raw_text, str) else type(raw_text).__name__
        logger.warning(f"Failed to parse AI response, using fallback result: {preview!r}")
        return fallback_result()

    try:
        score, coerced = coerce_score(parsed.get("score"))
        if coerced:
            logger.warning(f"AI response had unusable score {parsed.get('score')!r}, coerced to 0")
        return AnalysisResult(
            score=score,
            analysis=_coerce_analysis(parsed.get("analysis")),
            suggestions=_coerce_suggestions(parsed.get("suggestions")),
            skills_gap=_coerce_skills_gap(parsed.get("skillsGap")),
            validity=ResultValidity.SCORE_COERCED if coerced else ResultValidity.VALID,
        )
    except Exception as e:
        logger.warning(f"AI response failed contract validation, using fallback result: {type(e).__name__}: {e}")
        return fallback_result()
