"""
Pydantic schemas for admin endpoints.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from app.schemas.auth import AuditEntryResponse, UserResponse
from app.schemas.resume import ResumeResponse


class Pagination(BaseModel):
    page: int = Field(1, description="Current page number")
    page_size: int = Field(50, description="Number of items per page")
    total: int = Field(..., description="Total number of items")
    pages: int = Field(..., description="Total number of pages")


class AdminUserResponse(UserResponse):
    """User as seen by an admin."""
    is_active: Optional[bool] = None
    last_login_at: Optional[datetime] = None


class AdminUserListResponse(BaseModel):
    users: List[AdminUserResponse]
    pagination: Pagination


class AdminResumeListResponse(BaseModel):
    resumes: List[ResumeResponse]
    pagination: Pagination


class AdminAuditEntryResponse(AuditEntryResponse):
    user_id: int


class AdminAuditLogListResponse(BaseModel):
    logs: List[AdminAuditEntryResponse]
    pagination: Pagination


class AnalyticsResponse(BaseModel):
    """Platform totals."""
    total_users: int
    total_resumes: int
    average_ats_score: int = Field(..., ge=0, le=100, description="Mean ATS score over scored resumes")
    recent_users: int = Field(..., description="Users created in the last 30 days")
    recent_resumes: int = Field(..., description="Resumes created in the last 30 days")

    class Config:
        json_schema_extra = {
            "example": {
                "total_users": 120,
                "total_resumes": 340,
                "average_ats_score": 71,
                "recent_users": 18,
                "recent_resumes": 52
            }
        }
