"""Access gate: resolve the caller's session and check their profile role.

Routes declare what they need instead of checking inline::

    router = APIRouter(dependencies=[Depends(require_role(UserRole.SUPERADMIN))])

    @router.get("/profile")
    def read(session: UserSession = Depends(authenticate)): ...
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import jwt
from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dashboard.core.config import settings
from dashboard.core.errors import Forbidden, Unauthenticated
from dashboard.core.security import decode_session_token
from dashboard.db.session import get_db
from dashboard.models.profile import Profile, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserSession:
    user_id: str
    email: Optional[str] = None
    expires_at: Optional[datetime] = None


def _extract_token(request: Request) -> Optional[str]:
    # Cookie set by the identity provider first, then a bearer header for API clients
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    header = request.headers.get("authorization")
    if header:
        scheme, _, credentials = header.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return None


def _session_from_token(token: str) -> UserSession:
    try:
        payload = decode_session_token(token)
    except jwt.PyJWTError as exc:
        logger.info("Rejected session token: %s", exc)
        raise Unauthenticated()
    user_id = str(payload.get("sub") or "").strip()
    if not user_id:
        raise Unauthenticated()
    exp = payload.get("exp")
    return UserSession(
        user_id=user_id,
        email=payload.get("email"),
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc) if isinstance(exp, (int, float)) else None,
    )


def authenticate(request: Request) -> UserSession:
    """Return the caller's session or raise Unauthenticated (401)."""
    token = _extract_token(request)
    if not token:
        raise Unauthenticated()
    return _session_from_token(token)


def get_optional_session(request: Request) -> Optional[UserSession]:
    """Like authenticate, but missing, invalid or expired credentials yield None.

    Callers must then demand another proof of identity themselves.
    """
    token = _extract_token(request)
    if not token:
        return None
    try:
        return _session_from_token(token)
    except Unauthenticated:
        return None


def authorize(db: Session, session: UserSession, required_role: UserRole) -> None:
    """Allow only when the session owner's profile has ``required_role``.

    Store failures fail closed: they are logged and reported as Forbidden.
    """
    try:
        role = db.query(Profile.role).filter(Profile.user_id == session.user_id).scalar()
    except SQLAlchemyError:
        logger.exception("Role lookup failed for user %s", session.user_id)
        db.rollback()
        raise Forbidden()
    if role != required_role:
        raise Forbidden(f"Forbidden: Requires {required_role.value.lower()} access")


def require_role(required_role: UserRole):
    def checker(session: UserSession = Depends(authenticate), db: Session = Depends(get_db)) -> UserSession:
        authorize(db, session, required_role)
        return session
    return checker
