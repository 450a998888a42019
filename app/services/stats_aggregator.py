"""
Pure folds over a user's statistics snapshot.

The running average is kept without history:
    count' = count + 1
    avg'   = round_half_up((avg * count + score) / count')
Persisting the result atomically is stats_service's job.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from app.services.scoring import SCORE_MIN, SCORE_MAX, clamp, clamp_score


@dataclass(frozen=True)
class UserStatsSnapshot:
    user_id: int
    resumes_analyzed: int = 0
    avg_score: int = 0
    total_optimizations: int = 0
    last_activity_at: Optional[datetime] = None
    version: int = 0

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "resumesAnalyzed": self.resumes_analyzed,
            "avgScore": self.avg_score,
            "totalOptimizations": self.total_optimizations,
            "lastActivityAt": self.last_activity_at.isoformat() if self.last_activity_at else None,
        }


def zero_stats(user_id: int) -> UserStatsSnapshot:
    return UserStatsSnapshot(user_id=user_id)


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def fold_score(stats: UserStatsSnapshot, new_score: int, now: Optional[datetime] = None) -> UserStatsSnapshot:
    """Fold one analysis score into the running average and bump the analyzed counter."""
    score = clamp_score(new_score)
    count = max(0, stats.resumes_analyzed)
    new_count = count + 1

    if count == 0:
        new_avg = score
    else:
        total = int(clamp(stats.avg_score, SCORE_MIN, SCORE_MAX)) * count + score
        # Integer form of round_half_up(total / new_count)
        new_avg = (2 * total + new_count) // (2 * new_count)

    return replace(
        stats,
        resumes_analyzed=new_count,
        avg_score=new_avg,
        last_activity_at=_now(now),
    )


def fold_optimization(stats: UserStatsSnapshot, now: Optional[datetime] = None) -> UserStatsSnapshot:
    """Count one optimization; the score average is untouched."""
    return replace(
        stats,
        total_optimizations=max(0, stats.total_optimizations) + 1,
        last_activity_at=_now(now),
    )
