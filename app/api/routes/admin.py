"""
Admin endpoints: platform-wide listings and analytics. Admin role required.
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.models.user import User
from app.core.auth_dependency import get_db, get_admin_user
from app.schemas.admin import (
    AdminAuditEntryResponse,
    AdminAuditLogListResponse,
    AdminResumeListResponse,
    AdminUserListResponse,
    AdminUserResponse,
    AnalyticsResponse,
    Pagination,
)
from app.schemas.resume import ResumeResponse
from app.services.admin_service import (
    get_analytics_data,
    list_all_resumes,
    list_audit_logs,
    list_users,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


def _pagination(page: int, page_size: int, total: int) -> Pagination:
    return Pagination(page=page, page_size=page_size, total=total, pages=-(-total // page_size))


@router.get("/users", response_model=AdminUserListResponse)
def admin_list_users(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=200, description="Items per page"),
    db: Session = Depends(get_db),
    admin: User = Depends(get_admin_user),
):
    users, total = list_users(db, page, page_size)
    logger.debug(f"Admin users listed: admin_id={admin.id}, total={total}, page={page}")
    return AdminUserListResponse(
        users=[AdminUserResponse.model_validate(user) for user in users],
        pagination=_pagination(page, page_size, total),
    )


@router.get("/resumes", response_model=AdminResumeListResponse)
def admin_list_resumes(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=200, description="Items per page"),
    db: Session = Depends(get_db),
    admin: User = Depends(get_admin_user),
):
    resumes, total = list_all_resumes(db, page, page_size)
    logger.debug(f"Admin resumes listed: admin_id={admin.id}, total={total}, page={page}")
    return AdminResumeListResponse(
        resumes=[ResumeResponse.model_validate(resume) for resume in resumes],
        pagination=_pagination(page, page_size, total),
    )


@router.get("/analytics", response_model=AnalyticsResponse)
def admin_analytics(
    db: Session = Depends(get_db),
    admin: User = Depends(get_admin_user),
):
    return get_analytics_data(db)


@router.get("/audit-logs", response_model=AdminAuditLogListResponse)
def admin_audit_logs(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(100, ge=1, le=500, description="Items per page"),
    db: Session = Depends(get_db),
    admin: User = Depends(get_admin_user),
):
    logs, total = list_audit_logs(db, page, page_size)
    return AdminAuditLogListResponse(
        logs=[AdminAuditEntryResponse.model_validate(entry) for entry in logs],
        pagination=_pagination(page, page_size, total),
    )
