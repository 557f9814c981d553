from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import jwt

from dashboard.core.config import settings

SIGNUP_TOKEN_TYPE = "signup"


def decode_session_token(token: str) -> dict[str, Any]:
    """Verify a session token and return its claims.

    Raises jwt.PyJWTError if the token is malformed, expired, wrongly signed or
    is actually a signup token.
    """
    options: dict[str, Any] = {"require": ["sub", "exp"]}
    if not settings.session_audience:
        options["verify_aud"] = False
    payload = jwt.decode(
        token,
        settings.session_secret,
        algorithms=[settings.session_algorithm],
        audience=settings.session_audience or None,
        options=options,
    )
    if payload.get("typ") == SIGNUP_TOKEN_TYPE:
        raise jwt.InvalidTokenError("Signup token used as session")
    return payload


def create_signup_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a short-lived token that lets ``user_id`` create its own profile before a session exists."""
    expire = datetime.now(tz=timezone.utc) + (expires_delta or timedelta(minutes=settings.signup_token_ttl_minutes))
    to_encode = {"sub": str(user_id), "exp": expire, "typ": SIGNUP_TOKEN_TYPE}
    return jwt.encode(to_encode, settings.session_secret, algorithm=settings.session_algorithm)


def decode_signup_token(token: str) -> str:
    """Return the user id a signup token was issued for."""
    payload = jwt.decode(
        token,
        settings.session_secret,
        algorithms=[settings.session_algorithm],
        options={"require": ["sub", "exp"], "verify_aud": False},
    )
    if payload.get("typ") != SIGNUP_TOKEN_TYPE:
        raise jwt.InvalidTokenError("Not a signup token")
    return str(payload["sub"])
