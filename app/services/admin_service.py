"""
Admin service: paginated listings across all users and platform analytics.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from app.db.models.audit_log import AuditLog
from app.db.models.resume import Resume
from app.db.models.user import User
from app.services.scoring import round_half_up

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_DAYS = 30


def _page(query: Query, page: int, page_size: int) -> Tuple[List[Any], int]:
    total = query.order_by(None).count()
    offset = (page - 1) * page_size
    return query.offset(offset).limit(page_size).all(), total


def list_users(db: Session, page: int = 1, page_size: int = 50) -> Tuple[List[User], int]:
    query = db.query(User).order_by(User.created_at.desc(), User.id.desc())
    return _page(query, page, page_size)


def list_all_resumes(db: Session, page: int = 1, page_size: int = 50) -> Tuple[List[Resume], int]:
    query = db.query(Resume).order_by(Resume.created_at.desc(), Resume.id.desc())
    return _page(query, page, page_size)


def list_audit_logs(db: Session, page: int = 1, page_size: int = 100) -> Tuple[List[AuditLog], int]:
    query = db.query(AuditLog).order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
    return _page(query, page, page_size)


def get_analytics_data(db: Session, now: Optional[datetime] = None) -> Dict[str, int]:
    """
    Platform totals for the admin dashboard.

    Returns:
        total_users, total_resumes, average_ats_score (over scored resumes,
        rounded half up, 0 when none), and recent_users / recent_resumes
        created in the last RECENT_ACTIVITY_DAYS days
    """
    since = (now or datetime.now(timezone.utc)) - timedelta(days=RECENT_ACTIVITY_DAYS)

    total_users = db.query(func.count(User.id)).scalar() or 0
    total_resumes = db.query(func.count(Resume.id)).scalar() or 0
    average = db.query(func.avg(Resume.ats_score)).filter(Resume.ats_score.isnot(None)).scalar()
    recent_users = db.query(func.count(User.id)).filter(User.created_at >= since).scalar() or 0
    recent_resumes = db.query(func.count(Resume.id)).filter(Resume.created_at >= since).scalar() or 0

    analytics = {
        "total_users": total_users,
        "total_resumes": total_resumes,
        "average_ats_score": round_half_up(float(average)) if average is not None else 0,
        "recent_users": recent_users,
        "recent_resumes": recent_resumes,
    }
    logger.debug(f"Analytics computed: {analytics}")
    return analytics
