"""
Audit trail of user actions (register, login, analyze, optimize, ...).
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging_config import sanitize_log_data
from app.db.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    # Check for forwarded IP (from proxy/load balancer)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


def log_user_action(
    db: Session,
    user_id: Optional[int],
    action: str,
    details: Optional[Dict[str, Any]] = None,
    request: Optional[Request] = None,
) -> Optional[AuditLog]:
    """
    Record an audit entry for an authenticated user.

    Anonymous actions are not recorded. A failed audit write is logged and
    does not fail the action it describes.
    """
    if not user_id:
        return None

    entry = AuditLog(
        user_id=user_id,
        action=action,
        details=sanitize_log_data(details or {}),
        ip_address=get_client_ip(request) if request else None,
        user_agent=request.headers.get("User-Agent", "Unknown") if request else None,
    )
    try:
        db.add(entry)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to write audit log: user_id={user_id}, action={action}: {e}")
        return None

    logger.debug(f"Audit: user_id={user_id}, action={action}")
    return entry


def get_user_actions(db: Session, user_id: int, limit: int = 50, offset: int = 0) -> List[AuditLog]:
    return (
        db.query(AuditLog)
        .filter(AuditLog.user_id == user_id)
        .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
