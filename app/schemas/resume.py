"""
Pydantic schemas for resume endpoints.
"""
from typing import Optional, List, Dict, Any
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from app.schemas.analysis import AnalysisRequest
from app.schemas.stats import UserStatsResponse


class AnalyzeResumeRequest(AnalysisRequest):
    """Request schema for analyzing pasted resume text."""
    filename: Optional[str] = Field(None, max_length=255, description="Display name for the stored resume")

    class Config:
        json_schema_extra = {
            "example": {
                "resume_text": "Senior engineer, 5 years Python, AWS, Docker...",
                "industry": "technology",
                "filename": "jane_doe.txt"
            }
        }


class ResumeUpdateRequest(BaseModel):
    """Partial update; changing content or industry triggers re-analysis."""
    original_content: Optional[str] = Field(None, min_length=1)
    industry: Optional[str] = None
    filename: Optional[str] = Field(None, max_length=255)
    is_public: Optional[bool] = None

    @field_validator("original_content")
    @classmethod
    def validate_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Resume content must not be blank")
        return v


class ResumeResponse(BaseModel):
    """Stored resume with its latest analysis."""
    id: int
    user_id: Optional[int] = None
    filename: str
    original_content: str
    optimized_content: Optional[str] = None
    industry: str
    ats_score: Optional[int] = None
    analysis: Optional[Dict[str, Any]] = None
    suggestions: Optional[List[Dict[str, Any]]] = None
    skills_gap: Optional[List[Dict[str, Any]]] = None
    analysis_validity: Optional[str] = None
    is_public: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AnalyzeResumeResponse(BaseModel):
    """Result of one analysis: the caller-facing result plus what was stored."""
    result: Dict[str, Any] = Field(..., description="score, analysis, suggestions, skillsGap")
    resume: ResumeResponse
    stats: Optional[UserStatsResponse] = Field(None, description="Updated stats (authenticated users only)")


class OptimizeResumeResponse(BaseModel):
    optimized_content: str
    resume: ResumeResponse
    stats: Optional[UserStatsResponse] = None
