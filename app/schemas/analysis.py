"""
Pydantic schemas for the resume analysis contract.
"""
from enum import Enum
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.services.keyword_taxonomy import DEFAULT_INDUSTRY
from app.services.scoring import SCORE_MIN, SCORE_MAX, SKILL_LEVEL_MIN, SKILL_LEVEL_MAX

SuggestionType = Literal[
    "keywords", "quantify", "section", "formatting",
    "employment_gap", "template", "content", "structure",
]
Level = Literal["high", "medium", "low"]
Effort = Literal["easy", "moderate", "difficult"]


class ResultValidity(str, Enum):
    """How much of the model response survived validation."""
    VALID = "valid"
    SCORE_COERCED = "score_coerced"  # object parsed, score missing/non-numeric/NaN
    FALLBACK = "fallback"  # response could not be parsed at all


class AnalysisRequest(BaseModel):
    """A single resume analysis request."""
    resume_text: str = Field(..., min_length=1, description="Resume text, analyzed verbatim")
    industry: str = Field(DEFAULT_INDUSTRY.value, description="Industry identifier; unknown values use the default")

    @field_validator("resume_text")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Resume text must not be blank")
        return v


class Suggestion(BaseModel):
    """One improvement suggestion."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    type: SuggestionType = "content"
    title: str
    description: str = ""
    priority: Level = "medium"
    impact: Level = "medium"
    effort: Effort = "moderate"
    category: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    before_example: Optional[str] = Field(None, alias="beforeExample")
    after_example: Optional[str] = Field(None, alias="afterExample")


class SkillGapEntry(BaseModel):
    """Gap between a candidate's level in a skill and the level the industry expects (0-10 scales)."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    skill: str
    current_level: int = Field(SKILL_LEVEL_MIN, ge=SKILL_LEVEL_MIN, le=SKILL_LEVEL_MAX, alias="currentLevel")
    target_level: int = Field(SKILL_LEVEL_MAX, ge=SKILL_LEVEL_MIN, le=SKILL_LEVEL_MAX, alias="targetLevel")
    importance: int = Field(5, ge=SKILL_LEVEL_MIN, le=SKILL_LEVEL_MAX)
    market_demand: int = Field(5, ge=SKILL_LEVEL_MIN, le=SKILL_LEVEL_MAX, alias="marketDemand")


class AnalysisResult(BaseModel):
    """Validated outcome of one analysis. Immutable once built."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    score: int = Field(..., ge=SCORE_MIN, le=SCORE_MAX, description="ATS score 0-100")
    analysis: Dict[str, Any] = Field(default_factory=dict, description="Structured feedback")
    suggestions: List[Suggestion] = Field(default_factory=list)
    skills_gap: List[SkillGapEntry] = Field(default_factory=list, alias="skillsGap")
    validity: ResultValidity = ResultValidity.VALID

    def to_payload(self) -> Dict[str, Any]:
        """Caller-facing JSON shape: score, analysis, suggestions, skillsGap."""
        return self.model_dump(by_alias=True, exclude={"validity"}, mode="json")
