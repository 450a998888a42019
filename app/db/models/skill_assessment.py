"""
Self-assessed skill levels for an industry, saved per user.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Index
from sqlalchemy.sql import func
from app.db.base import Base


class SkillAssessment(Base):
    __tablename__ = "skill_assessments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    industry = Column(String, nullable=False)
    skills = Column(JSON, nullable=False)  # [{name, currentLevel, targetLevel, importance, confidence}]
    overall_score = Column(Integer, nullable=True)  # 0-100
    recommendations = Column(JSON, nullable=True)  # [str]
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index('idx_skill_assessment_user_created', 'user_id', 'created_at'),
    )
