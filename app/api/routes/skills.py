"""
Skill self-assessment endpoints.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.db.models.user import User
from app.core.auth_dependency import get_db, get_current_user_obj
from app.schemas.skills import (
    SkillAssessmentCreatedResponse,
    SkillAssessmentRequest,
    SkillAssessmentResponse,
)
from app.services.audit_service import log_user_action
from app.services.skills_service import (
    create_skill_assessment,
    get_skill_assessments_for_user,
    recommendations_for,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/skills", tags=["Skills"])


@router.post("/assess", response_model=SkillAssessmentCreatedResponse)
def assess_skills(
    payload: SkillAssessmentRequest,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_obj),
):
    """Save a skill self-assessment. Default recommendations are returned when none were given."""
    assessment = create_skill_assessment(db, user.id, payload)

    log_user_action(db, user.id, "skills_assessment", {
        "assessment_id": assessment.id,
        "industry": assessment.industry,
        "overall_score": assessment.overall_score,
        "skills_count": len(assessment.skills),
    }, request)

    return SkillAssessmentCreatedResponse(
        message="Skills assessment saved successfully",
        assessment=SkillAssessmentResponse.model_validate(assessment),
        recommendations=recommendations_for(assessment),
    )


@router.get("/assessments", response_model=List[SkillAssessmentResponse])
def list_assessments(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_obj),
):
    return get_skill_assessments_for_user(db, user.id)
