from sqlalchemy import Column, Integer, String, ForeignKey, Text, JSON, Boolean, DateTime, Index
from sqlalchemy.sql import func
from app.db.base import Base

class Resume(Base):
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)  # NULL for anonymous analyses
    filename = Column(String, nullable=False)
    original_content = Column(Text, nullable=False)
    optimized_content = Column(Text, nullable=True)
    industry = Column(String, nullable=False)
    ats_score = Column(Integer, nullable=True)
    analysis = Column(JSON, nullable=True)
    suggestions = Column(JSON, nullable=True)
    skills_gap = Column(JSON, nullable=True)
    analysis_validity = Column(String, nullable=True)  # "valid", "score_coerced", "fallback"
    is_public = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_resume_user_created', 'user_id', 'created_at'),
    )
