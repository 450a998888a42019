"""
Pydantic schemas for skill self-assessments.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from app.services.keyword_taxonomy import DEFAULT_INDUSTRY
from app.services.scoring import SCORE_MIN, SCORE_MAX, SKILL_LEVEL_MIN, SKILL_LEVEL_MAX


class AssessedSkill(BaseModel):
    """One skill rated by the user on the 0-10 scale used for skill gaps."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=100)
    current_level: int = Field(..., ge=SKILL_LEVEL_MIN, le=SKILL_LEVEL_MAX, alias="currentLevel")
    target_level: int = Field(..., ge=SKILL_LEVEL_MIN, le=SKILL_LEVEL_MAX, alias="targetLevel")
    importance: int = Field(5, ge=SKILL_LEVEL_MIN, le=SKILL_LEVEL_MAX)
    confidence: int = Field(5, ge=SKILL_LEVEL_MIN, le=SKILL_LEVEL_MAX)


class SkillAssessmentRequest(BaseModel):
    """Request schema for saving a skill assessment."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "industry": "technology",
                "skills": [{"name": "Kubernetes", "currentLevel": 3, "targetLevel": 8, "importance": 9, "confidence": 6}],
                "overallScore": 62,
                "recommendations": ["Deploy a side project on a managed cluster"]
            }
        },
    )

    industry: str = Field(DEFAULT_INDUSTRY.value, description="Industry identifier; unknown values use the default")
    skills: List[AssessedSkill] = Field(..., min_length=1)
    overall_score: Optional[int] = Field(None, ge=SCORE_MIN, le=SCORE_MAX, alias="overallScore")
    recommendations: Optional[List[str]] = None


class SkillAssessmentResponse(BaseModel):
    """Stored skill assessment."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    industry: str
    skills: List[dict]
    overall_score: Optional[int] = None
    recommendations: Optional[List[str]] = None
    created_at: Optional[datetime] = None


class SkillAssessmentCreatedResponse(BaseModel):
    message: str
    assessment: SkillAssessmentResponse
    recommendations: List[str]
