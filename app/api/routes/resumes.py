"""
Resume analysis endpoints.
"""
import logging
from typing import Optional, List
from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.db.models.resume import Resume
from app.db.models.user import User
from app.core.auth_dependency import get_db, get_current_user_obj, get_optional_user
from app.schemas.analysis import AnalysisRequest
from app.schemas.resume import (
    AnalyzeResumeRequest,
    AnalyzeResumeResponse,
    OptimizeResumeResponse,
    ResumeResponse,
    ResumeUpdateRequest,
)
from app.schemas.stats import UserStatsResponse
from app.services.analysis_service import AnalysisFailedError, AnalysisOrchestrator, get_orchestrator
from app.services.audit_service import log_user_action
from app.services.keyword_taxonomy import resolve_industry
from app.api.errors import raise_for_analysis_failure, raise_for_stats_conflict
from app.services.resume_service import (
    analyze_and_store,
    delete_resume,
    get_resume,
    list_resumes_for_user,
    optimize_resume,
    reanalyze_resume,
    update_resume_fields,
)
from app.services.stats_service import StatsConflictError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["Resumes"])

MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB
# Binary formats (PDF, DOC, DOCX) would need text extraction first
ALLOWED_CONTENT_TYPES = {"text/plain"}


# ============================================
# Helper Functions
# ============================================

def _get_resume_or_404(db: Session, resume_id: int) -> Resume:
    resume = get_resume(db, resume_id)
    if not resume:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found")
    return resume


def _require_owner(resume: Resume, user: Optional[User]) -> None:
    if user is None or resume.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")


def _run_analysis(
    db: Session,
    orchestrator: AnalysisOrchestrator,
    analysis_request: AnalysisRequest,
    filename: Optional[str],
    user: Optional[User],
    request: Request,
) -> AnalyzeResumeResponse:
    user_id = user.id if user else None
    try:
        resume, result, stats = analyze_and_store(
            db, orchestrator, analysis_request, filename=filename, user_id=user_id
        )
    except AnalysisFailedError as e:
        raise_for_analysis_failure(e)
    except StatsConflictError as e:
        raise_for_stats_conflict(e)

    log_user_action(db, user_id, "analyze_resume", {
        "resume_id": resume.id,
        "filename": resume.filename,
        "industry": resume.industry,
        "ats_score": resume.ats_score,
    }, request)

    return AnalyzeResumeResponse(
        result=result.to_payload(),
        resume=ResumeResponse.model_validate(resume),
        stats=UserStatsResponse.from_snapshot(stats) if stats else None,
    )


# ============================================
# Endpoints
# ============================================

@router.post("/analyze", response_model=AnalyzeResumeResponse)
def analyze_resume_text(
    payload: AnalyzeResumeRequest,
    request: Request,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    """
    Analyze pasted resume text.

    Returns the validated result (score, analysis, suggestions, skillsGap) and
    the stored resume. Authenticated callers also get their updated stats.
    """
    analysis_request = AnalysisRequest(resume_text=payload.resume_text, industry=payload.industry)
    return _run_analysis(db, orchestrator, analysis_request, payload.filename, user, request)


@router.post("/upload", response_model=AnalyzeResumeResponse)
async def upload_resume(
    request: Request,
    file: UploadFile = File(...),
    industry: str = Form(...),
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    """
    Analyze an uploaded resume file.

    Only plain-text files are accepted; they are decoded as UTF-8.
    """
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Unsupported file type. Upload the resume as a plain-text (.txt) file."
        )

    raw = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(raw) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="File exceeds 10MB limit")

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is not UTF-8 text")
    if not text.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file contains no text")

    analysis_request = AnalysisRequest(resume_text=text, industry=industry)
    # The model call blocks; keep it off the event loop
    return await run_in_threadpool(
        _run_analysis, db, orchestrator, analysis_request, file.filename, user, request
    )


@router.get("", response_model=List[ResumeResponse])
def list_resumes(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_obj),
):
    return list_resumes_for_user(db, user.id)


@router.get("/{resume_id}", response_model=ResumeResponse)
def read_resume(
    resume_id: int,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
):
    resume = _get_resume_or_404(db, resume_id)
    # Owned resumes are private unless published; anonymous analyses are readable by id
    if resume.user_id and not resume.is_public:
        _require_owner(resume, user)
    return resume


@router.patch("/{resume_id}", response_model=ResumeResponse)
def update_resume(
    resume_id: int,
    payload: ResumeUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_obj),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    """
    Update a resume. New content or a new industry re-runs the analysis
    (without folding the score into stats a second time).
    """
    resume = _get_resume_or_404(db, resume_id)
    _require_owner(resume, user)

    updates = payload.model_dump(exclude_unset=True)
    content = updates.pop("original_content", None)
    industry = updates.pop("industry", None)

    if content is not None or industry is not None:
        try:
            resume, _ = reanalyze_resume(
                db,
                orchestrator,
                resume,
                original_content=content if content is not None else resume.original_content,
                industry=industry if industry is not None else resume.industry,
            )
        except AnalysisFailedError as e:
            raise_for_analysis_failure(e)
        log_user_action(db, user.id, "update_resume", {"resume_id": resume.id, "reanalyzed": True}, request)

    if updates:
        resume = update_resume_fields(db, resume, updates)

    return resume


@router.delete("/{resume_id}")
def remove_resume(
    resume_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_obj),
):
    resume = _get_resume_or_404(db, resume_id)
    _require_owner(resume, user)

    delete_resume(db, resume)
    log_user_action(db, user.id, "delete_resume", {"resume_id": resume_id}, request)

    return {"message": "Resume deleted successfully"}


@router.post("/{resume_id}/optimize", response_model=OptimizeResumeResponse)
def optimize(
    resume_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    """Rewrite a resume applying its suggestions; counts one optimization for the owner."""
    resume = _get_resume_or_404(db, resume_id)
    # Anonymous resumes can only be optimized anonymously
    if resume.user_id or user is not None:
        _require_owner(resume, user)

    user_id = user.id if user else None
    try:
        resume, stats = optimize_resume(db, orchestrator, resume, user_id=user_id)
    except AnalysisFailedError as e:
        raise_for_analysis_failure(e)
    except StatsConflictError as e:
        raise_for_stats_conflict(e)

    log_user_action(db, user_id, "optimize_resume", {
        "resume_id": resume.id,
        "industry": resolve_industry(resume.industry).value,
    }, request)

    return OptimizeResumeResponse(
        optimized_content=resume.optimized_content,
        resume=ResumeResponse.model_validate(resume),
        stats=UserStatsResponse.from_snapshot(stats) if stats else None,
    )
