"""
Stats service: atomic read-modify-write of per-user statistics.

Every write is a compare-and-swap on UserStats.version. A writer that loses
the race rolls back, re-reads and re-folds, up to STATS_MAX_RETRIES attempts.
"""
import logging
from dataclasses import replace
from typing import Callable, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import STATS_MAX_RETRIES
from app.db.models.user_stats import UserStats
from app.services.stats_aggregator import (
    UserStatsSnapshot,
    fold_optimization,
    fold_score,
)

logger = logging.getLogger(__name__)


class StatsConflictError(Exception):
    """Concurrent writers kept winning until the retry budget ran out."""

    def __init__(self, user_id: int, attempts: int):
        self.user_id = user_id
        self.attempts = attempts
        super().__init__(f"Stats update for user_id={user_id} lost {attempts} consecutive races")


def _to_snapshot(row: UserStats) -> UserStatsSnapshot:
    return UserStatsSnapshot(
        user_id=row.user_id,
        resumes_analyzed=row.resumes_analyzed or 0,
        avg_score=row.avg_score or 0,
        total_optimizations=row.total_optimizations or 0,
        last_activity_at=row.last_activity_at,
        version=row.version or 0,
    )


def get_user_stats(db: Session, user_id: int) -> Optional[UserStatsSnapshot]:
    """Read the current stats row, bypassing any stale copy in the session."""
    row = (
        db.query(UserStats)
        .filter(UserStats.user_id == user_id)
        .populate_existing()
        .first()
    )
    return _to_snapshot(row) if row else None


def create_user_stats(db: Session, user_id: int) -> UserStats:
    """
    Add a zeroed stats row to the session without committing.

    Used at registration so the user and the stats row land in one transaction.
    """
    row = UserStats(
        user_id=user_id,
        resumes_analyzed=0,
        avg_score=0,
        total_optimizations=0,
        version=0,
    )
    db.add(row)
    return row


def ensure_user_stats(db: Session, user_id: int) -> UserStatsSnapshot:
    """Return the user's stats, creating a zeroed row if none exists yet."""
    snapshot = get_user_stats(db, user_id)
    if snapshot is not None:
        return snapshot

    try:
        create_user_stats(db, user_id)
        db.commit()
        logger.info(f"Created missing stats row: user_id={user_id}")
    except IntegrityError:
        # Another request created it first
        db.rollback()

    snapshot = get_user_stats(db, user_id)
    if snapshot is None:
        raise StatsConflictError(user_id, 1)
    return snapshot


def compare_and_swap(db: Session, seen: UserStatsSnapshot, updated: UserStatsSnapshot) -> bool:
    """
    Write ``updated`` only if the row still carries ``seen.version``.

    Returns:
        True if the write was committed, False if another writer got there first
    """
    try:
        result = db.execute(
            update(UserStats)
            .where(
                UserStats.user_id == seen.user_id,
                UserStats.version == seen.version,
            )
            .values(
                resumes_analyzed=updated.resumes_analyzed,
                avg_score=updated.avg_score,
                total_optimizations=updated.total_optimizations,
                last_activity_at=updated.last_activity_at,
                version=seen.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            db.rollback()
            return False
        db.commit()
        return True
    except SQLAlchemyError:
        db.rollback()
        raise


def update_stats(
    db: Session,
    user_id: int,
    fold: Callable[[UserStatsSnapshot], UserStatsSnapshot],
    max_retries: Optional[int] = None,
) -> UserStatsSnapshot:
    """
    Apply ``fold`` to the user's stats atomically.

    Raises:
        StatsConflictError: every attempt lost a race
    """
    attempts = max_retries or STATS_MAX_RETRIES

    for attempt in range(1, attempts + 1):
        seen = ensure_user_stats(db, user_id)
        updated = fold(seen)
        if compare_and_swap(db, seen, updated):
            return replace(updated, version=seen.version + 1)
        logger.info(
            f"Stats write conflict, retrying: user_id={user_id}, "
            f"attempt={attempt}/{attempts}, seen_version={seen.version}"
        )

    logger.error(f"Stats update gave up after {attempts} conflicts: user_id={user_id}")
    raise StatsConflictError(user_id, attempts)


def record_analysis(db: Session, user_id: int, score: int) -> UserStatsSnapshot:
    snapshot = update_stats(db, user_id, lambda stats: fold_score(stats, score))
    logger.info(
        f"Stats updated: user_id={user_id}, score={score}, "
        f"resumes_analyzed={snapshot.resumes_analyzed}, avg_score={snapshot.avg_score}"
    )
    return snapshot


def record_optimization(db: Session, user_id: int) -> UserStatsSnapshot:
    snapshot = update_stats(db, user_id, fold_optimization)
    logger.info(f"Stats updated: user_id={user_id}, total_optimizations={snapshot.total_optimizations}")
    return snapshot
