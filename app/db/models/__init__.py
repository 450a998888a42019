"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in table creation.
"""
from app.db.models.user import User
from app.db.models.resume import Resume
from app.db.models.user_stats import UserStats
from app.db.models.audit_log import AuditLog
from app.db.models.skill_assessment import SkillAssessment

# Explicitly export all models for clarity
__all__ = [
    "User",
    "Resume",
    "UserStats",
    "AuditLog",
    "SkillAssessment",
]
