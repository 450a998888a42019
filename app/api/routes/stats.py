"""
User statistics endpoint.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.models.user import User
from app.core.auth_dependency import get_db, get_optional_user
from app.schemas.stats import UserStatsResponse
from app.services.stats_service import get_user_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("", response_model=UserStatsResponse)
def read_stats(
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
):
    """
    Analysis rollup for the authenticated user.

    Anonymous callers (and users whose stats row does not exist yet) get zeroed stats.
    """
    if user is None:
        return UserStatsResponse()

    snapshot = get_user_stats(db, user.id)
    logger.debug(f"Stats requested: user_id={user.id}, found={snapshot is not None}")
    return UserStatsResponse.from_snapshot(snapshot)
