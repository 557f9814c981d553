import logging
from typing import Optional

import jwt
from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dashboard.api.deps import UserSession, authenticate, get_optional_session
from dashboard.core.errors import Conflict, Forbidden, NotFound, Unauthenticated
from dashboard.core.security import decode_signup_token
from dashboard.db.session import get_db
from dashboard.models.profile import Profile, UserRole
from dashboard.schemas.profile import ProfileCreate, ProfileOut, ProfileUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def _own_profile(db: Session, session: UserSession) -> Profile:
    profile = db.query(Profile).filter(Profile.user_id == session.user_id).first()
    if not profile:
        raise NotFound("Profile not found")
    return profile


@router.get("", response_model=ProfileOut)
def get_own_profile(session: UserSession = Depends(authenticate), db: Session = Depends(get_db)):
    return _own_profile(db, session)


@router.put("", response_model=ProfileOut)
def update_own_profile(
    payload: ProfileUpdate,
    session: UserSession = Depends(authenticate),
    db: Session = Depends(get_db),
):
    profile = _own_profile(db, session)
    # Absent keys are left as they are; explicit nulls clear the name/avatar columns
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(profile, key, value)
    db.commit()
    db.refresh(profile)
    return profile


def _check_signup_identity(user_id: str, session: Optional[UserSession], signup_token: Optional[str]) -> None:
    """The profile's user id must be proven by a session or a signup token, never taken on trust."""
    if session is not None:
        if session.user_id != user_id:
            raise Forbidden("Cannot create a profile for another user")
        return
    if not signup_token:
        raise Unauthenticated("A session or signup token is required")
    try:
        token_user_id = decode_signup_token(signup_token)
    except jwt.PyJWTError as exc:
        logger.info("Rejected signup token: %s", exc)
        raise Unauthenticated("Invalid signup token")
    if token_user_id != user_id:
        raise Forbidden("Signup token was issued for another user")


@router.post("", response_model=ProfileOut, status_code=status.HTTP_201_CREATED)
def create_profile(
    payload: ProfileCreate,
    session: Optional[UserSession] = Depends(get_optional_session),
    signup_token: Optional[str] = Header(default=None, alias="X-Signup-Token"),
    db: Session = Depends(get_db),
):
    """Create the caller's profile during signup (role USER, active)."""
    _check_signup_identity(payload.user_id, session, signup_token)

    existing = db.query(Profile.id).filter(Profile.user_id == payload.user_id).first()
    if existing:
        raise Conflict("Profile already exists")

    profile = Profile(
        user_id=payload.user_id,
        first_name=payload.first_name or None,
        last_name=payload.last_name or None,
        avatar_url=payload.avatar_url or None,
        role=UserRole.USER,
        active=True,
    )
    db.add(profile)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same user id
        db.rollback()
        raise Conflict("Profile already exists")
    db.refresh(profile)
    logger.info("Created profile for %s", profile.user_id)
    return profile
