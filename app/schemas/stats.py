"""
Pydantic schemas for user statistics.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

from app.services.stats_aggregator import UserStatsSnapshot


class UserStatsResponse(BaseModel):
    """Per-user analysis rollup."""
    resumes_analyzed: int = Field(0, ge=0)
    avg_score: int = Field(0, ge=0, le=100, description="Running average ATS score")
    total_optimizations: int = Field(0, ge=0)
    last_activity_at: Optional[datetime] = None

    @classmethod
    def from_snapshot(cls, snapshot: Optional[UserStatsSnapshot]) -> "UserStatsResponse":
        if snapshot is None:
            return cls()
        return cls(
            resumes_analyzed=snapshot.resumes_analyzed,
            avg_score=snapshot.avg_score,
            total_optimizations=snapshot.total_optimizations,
            last_activity_at=snapshot.last_activity_at,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "resumes_analyzed": 3,
                "avg_score": 90,
                "total_optimizations": 1,
                "last_activity_at": "2026-01-15T10:30:00Z"
            }
        }
