import logging
from datetime import datetime, timezone
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db.models.user import User
from app.core.auth_dependency import get_db, get_current_user_obj
from app.core.security import hash_password, verify_password, create_access_token
from app.schemas.auth import AuditEntryResponse, RegisterRequest, TokenResponse, UserResponse
from app.services.audit_service import get_user_actions, log_user_action
from app.services.stats_service import create_user_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token({"sub": user.email}),
        user=UserResponse.model_validate(user),
    )


# ✅ USER REGISTRATION (user + zeroed stats in one transaction)
@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    email = payload.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists with this email")
    if db.query(User).filter(User.username == payload.username).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")

    user = User(
        username=payload.username,
        email=email,
        password_hash=hash_password(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
        role="user",
    )
    try:
        db.add(user)
        db.flush()
        create_user_stats(db, user.id)
        db.commit()
    except IntegrityError:
        # A concurrent registration took the email or username first
        db.rollback()
        logger.info(f"Registration lost a uniqueness race: username={payload.username}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists with this email or username")
    db.refresh(user)

    logger.info(f"User registered: user_id={user.id}")
    log_user_action(db, user.id, "register", {"email": user.email}, request)

    return _token_response(user)


# ✅ OAUTH2 LOGIN (Swagger sends "username", treated as email)
@router.post("/login", response_model=TokenResponse)
def login(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    user = db.query(User).filter(User.email == form_data.username.lower()).first()

    if not user or not verify_password(form_data.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if user.is_active is False:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account disabled")

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)

    log_user_action(db, user.id, "login", {"email": user.email}, request)

    return _token_response(user)


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user_obj)):
    return current_user


@router.get("/me/activity", response_model=List[AuditEntryResponse])
def my_activity(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    current_user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Audit trail of the current user, newest first."""
    return get_user_actions(db, current_user.id, limit=limit, offset=offset)
