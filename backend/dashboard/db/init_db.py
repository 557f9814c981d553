import logging

from dashboard.db.session import engine, SessionLocal
from dashboard.models.base import Base
from dashboard.models.company import Company  # noqa: F401
from dashboard.models.profile import Profile, UserRole
from dashboard.core.config import settings

logger = logging.getLogger(__name__)


def create_tables():
    Base.metadata.create_all(bind=engine)


def seed_superadmin():
    """Ensure SEED_SUPERADMIN_USER_ID has a SUPERADMIN profile (idempotent)."""
    user_id = (settings.seed_superadmin_user_id or "").strip()
    if not user_id:
        return
    db = SessionLocal()
    try:
        profile = db.query(Profile).filter(Profile.user_id == user_id).first()
        if not profile:
            db.add(Profile(user_id=user_id, role=UserRole.SUPERADMIN, active=True))
            db.commit()
            logger.info("Seeded SUPERADMIN profile for %s", user_id)
        elif profile.role != UserRole.SUPERADMIN:
            profile.role = UserRole.SUPERADMIN
            db.commit()
            logger.info("Promoted profile %s to SUPERADMIN", user_id)
    finally:
        db.close()
