import os
import tempfile
from datetime import datetime, timedelta, timezone

# Configure before the dashboard package is imported
_DB_DIR = tempfile.mkdtemp(prefix="dashboard-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/test.db"
os.environ["ENV"] = "test"
os.environ["SESSION_SECRET"] = "test-secret"
os.environ["SESSION_AUDIENCE"] = "authenticated"

import jwt  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from dashboard.core.config import settings  # noqa: E402
from dashboard.db.session import SessionLocal, engine  # noqa: E402
from dashboard.main import app  # noqa: E402
from dashboard.models.base import Base  # noqa: E402
from dashboard.models.company import Company  # noqa: E402
from dashboard.models.profile import Profile, UserRole  # noqa: E402


@pytest.fixture(autouse=True)
def _database():
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def client():
    return TestClient(app)


def create_session_token(subject: str, email: str | None = None, expires_delta: timedelta | None = None) -> str:
    """Mint a token shaped like the identity provider's session JWT."""
    expire = datetime.now(tz=timezone.utc) + (expires_delta or timedelta(hours=1))
    claims = {"sub": subject, "exp": expire, "aud": settings.session_audience, "role": "authenticated"}
    if email:
        claims["email"] = email
    return jwt.encode(claims, settings.session_secret, algorithm=settings.session_algorithm)


def auth_headers(user_id: str, email: str | None = None) -> dict:
    return {"Authorization": f"Bearer {create_session_token(user_id, email=email)}"}


def make_profile(user_id: str, role: UserRole = UserRole.USER, **fields) -> int:
    db = SessionLocal()
    try:
        p = Profile(user_id=user_id, role=role, active=fields.pop("active", True), **fields)
        db.add(p)
        db.commit()
        return p.id
    finally:
        db.close()


def make_company(name: str, **fields) -> int:
    db = SessionLocal()
    try:
        c = Company(name=name, **fields)
        db.add(c)
        db.commit()
        return c.id
    finally:
        db.close()


def failing_commit_db(exc: Exception):
    """get_db replacement whose commit raises ``exc``; reads still hit the test database."""
    def override():
        db = SessionLocal()

        def commit():
            raise exc

        db.commit = commit
        try:
            yield db
        finally:
            db.close()
    return override


def load_profile(user_id: str) -> Profile | None:
    db = SessionLocal()
    try:
        return db.query(Profile).filter(Profile.user_id == user_id).first()
    finally:
        db.close()


def at(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


@pytest.fixture
def superadmin_headers():
    make_profile("admin-1", role=UserRole.SUPERADMIN)
    return auth_headers("admin-1")


@pytest.fixture
def user_headers():
    make_profile("user-1", first_name="Ada", last_name="Lovelace", avatar_url="/avatars/ada.png")
    return auth_headers("user-1")
