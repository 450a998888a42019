"""
Per-user rollup of analysis activity.

Rows are only ever changed through app.services.stats_service, which bumps
``version`` on every write so concurrent folds can detect each other.
"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.sql import func
from app.db.base import Base


class UserStats(Base):
    __tablename__ = "user_stats"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    resumes_analyzed = Column(Integer, nullable=False, default=0)
    avg_score = Column(Integer, nullable=False, default=0)  # 0-100
    total_optimizations = Column(Integer, nullable=False, default=0)
    last_activity_at = Column(DateTime(timezone=True), server_default=func.now())
    version = Column(Integer, nullable=False, default=0)  # optimistic concurrency token
