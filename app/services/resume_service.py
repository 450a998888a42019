"""
Resume service: runs the analysis pipeline and persists its outcome.

The resume record is committed before the stats fold, so a failed fold never
loses the analysis itself.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.db.models.resume import Resume
from app.schemas.analysis import AnalysisRequest, AnalysisResult
from app.services.analysis_service import AnalysisOrchestrator
from app.services.keyword_taxonomy import resolve_industry
from app.services.stats_aggregator import UserStatsSnapshot
from app.services.stats_service import record_analysis, record_optimization

logger = logging.getLogger(__name__)


def _apply_result(resume: Resume, result: AnalysisResult) -> None:
    payload = result.to_payload()
    resume.ats_score = payload["score"]
    resume.analysis = payload["analysis"]
    resume.suggestions = payload["suggestions"]
    resume.skills_gap = payload["skillsGap"]
    resume.analysis_validity = result.validity.value


def create_resume_record(
    db: Session,
    result: AnalysisResult,
    metadata: Dict[str, Any],
) -> Resume:
    """
    Persist an analysis result together with its resume metadata.

    Args:
        db: Database session
        result: Validated analysis result
        metadata: user_id (None for anonymous), filename, original_content, industry

    Returns:
        The committed Resume row
    """
    resume = Resume(
        user_id=metadata.get("user_id"),
        filename=metadata.get("filename") or "resume.txt",
        original_content=metadata["original_content"],
        industry=metadata["industry"],
    )
    _apply_result(resume, result)
    db.add(resume)
    db.commit()
    db.refresh(resume)

    logger.info(
        f"Resume stored: resume_id={resume.id}, user_id={resume.user_id}, "
        f"industry={resume.industry}, ats_score={resume.ats_score}"
    )
    return resume


def analyze_and_store(
    db: Session,
    orchestrator: AnalysisOrchestrator,
    request: AnalysisRequest,
    filename: Optional[str] = None,
    user_id: Optional[int] = None,
) -> Tuple[Resume, AnalysisResult, Optional[UserStatsSnapshot]]:
    """
    Analyze a resume, store it and fold the score into the owner's stats.

    Raises:
        AnalysisFailedError: model service failure (nothing is stored)
        StatsConflictError: the stats fold lost too many races (the resume is kept)
    """
    result = orchestrator.analyze(request)
    resume = create_resume_record(db, result, {
        "user_id": user_id,
        "filename": filename,
        "original_content": request.resume_text,
        "industry": resolve_industry(request.industry).value,
    })

    stats = record_analysis(db, user_id, result.score) if user_id else None
    return resume, result, stats


def get_resume(db: Session, resume_id: int) -> Optional[Resume]:
    return db.query(Resume).filter(Resume.id == resume_id).first()


def list_resumes_for_user(db: Session, user_id: int) -> List[Resume]:
    return (
        db.query(Resume)
        .filter(Resume.user_id == user_id)
        .order_by(Resume.created_at.desc(), Resume.id.desc())
        .all()
    )


def reanalyze_resume(
    db: Session,
    orchestrator: AnalysisOrchestrator,
    resume: Resume,
    original_content: str,
    industry: str,
) -> Tuple[Resume, AnalysisResult]:
    """
    Re-run the pipeline on edited content. The stats fold is not repeated,
    so one resume contributes one score to the running average.
    """
    request = AnalysisRequest(resume_text=original_content, industry=industry)
    result = orchestrator.analyze(request)

    resume.original_content = original_content
    resume.industry = resolve_industry(industry).value
    _apply_result(resume, result)
    db.commit()
    db.refresh(resume)

    logger.info(f"Resume re-analyzed: resume_id={resume.id}, ats_score={resume.ats_score}")
    return resume, result


def update_resume_fields(db: Session, resume: Resume, updates: Dict[str, Any]) -> Resume:
    for field, value in updates.items():
        setattr(resume, field, value)
    db.commit()
    db.refresh(resume)
    return resume


def delete_resume(db: Session, resume: Resume) -> None:
    resume_id = resume.id
    db.delete(resume)
    db.commit()
    logger.info(f"Resume deleted: resume_id={resume_id}")


def optimize_resume(
    db: Session,
    orchestrator: AnalysisOrchestrator,
    resume: Resume,
    user_id: Optional[int] = None,
) -> Tuple[Resume, Optional[UserStatsSnapshot]]:
    """
    Rewrite a stored resume using its suggestions and count the optimization.

    Raises:
        AnalysisFailedError: model service failure (resume unchanged)
        StatsConflictError: the stats fold lost too many races (rewrite is kept)
    """
    optimized = orchestrator.optimize(
        resume.original_content,
        resume.suggestions or [],
        resume.industry,
    )
    resume.optimized_content = optimized
    db.commit()
    db.refresh(resume)

    logger.info(f"Resume optimized: resume_id={resume.id}, chars={len(optimized)}")

    stats = record_optimization(db, user_id) if user_id else None
    return resume, stats
