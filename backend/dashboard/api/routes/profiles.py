from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from dashboard.api.deps import require_role
from dashboard.db.session import get_db
from dashboard.models.profile import Profile, UserRole
from dashboard.schemas.profile import ProfileList

router = APIRouter(dependencies=[Depends(require_role(UserRole.SUPERADMIN))])


@router.get("", response_model=ProfileList)
def list_profiles(
    role: Optional[UserRole] = Query(default=None),
    active: Optional[bool] = Query(default=None),
    db: Session = Depends(get_db),
):
    """Profiles filtered by role and/or active flag, newest first."""
    q = db.query(Profile)
    if role is not None:
        q = q.filter(Profile.role == role)
    if active is not None:
        q = q.filter(Profile.active == active)
    profiles = q.order_by(Profile.created_at.desc(), Profile.id.desc()).all()
    return {"profiles": profiles}
