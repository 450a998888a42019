"""
Skill assessment service: stores a user's self-rated skills per industry.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from app.db.models.skill_assessment import SkillAssessment
from app.schemas.skills import SkillAssessmentRequest
from app.services.keyword_taxonomy import resolve_industry

logger = logging.getLogger(__name__)

# Returned when the caller saves an assessment without its own recommendations
DEFAULT_RECOMMENDATIONS = (
    "Focus on improving your weakest skills first",
    "Consider taking online courses for skill gaps",
    "Practice with real-world projects",
    "Get certifications for important skills",
)


def create_skill_assessment(db: Session, user_id: int, request: SkillAssessmentRequest) -> SkillAssessment:
    assessment = SkillAssessment(
        user_id=user_id,
        industry=resolve_industry(request.industry).value,
        skills=[skill.model_dump(by_alias=True) for skill in request.skills],
        overall_score=request.overall_score,
        recommendations=request.recommendations,
    )
    db.add(assessment)
    db.commit()
    db.refresh(assessment)

    logger.info(
        f"Skill assessment stored: assessment_id={assessment.id}, user_id={user_id}, "
        f"industry={assessment.industry}, skills={len(assessment.skills)}"
    )
    return assessment


def get_skill_assessments_for_user(db: Session, user_id: int) -> List[SkillAssessment]:
    return (
        db.query(SkillAssessment)
        .filter(SkillAssessment.user_id == user_id)
        .order_by(SkillAssessment.created_at.desc(), SkillAssessment.id.desc())
        .all()
    )


def recommendations_for(assessment: SkillAssessment) -> List[str]:
    return list(assessment.recommendations or DEFAULT_RECOMMENDATIONS)
