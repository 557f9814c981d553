from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dashboard.api.deps import require_role
from dashboard.db.session import get_db
from dashboard.models.company import Company
from dashboard.models.profile import UserRole
from dashboard.schemas.company import CompanyCreate, CompanyOut

router = APIRouter(dependencies=[Depends(require_role(UserRole.SUPERADMIN))])


@router.get("", response_model=List[CompanyOut])
def list_companies(db: Session = Depends(get_db)):
    """All companies ordered by name; no pagination."""
    return db.query(Company).order_by(Company.name.asc(), Company.id.asc()).all()


@router.post("", response_model=CompanyOut)
def create_company(payload: CompanyCreate, db: Session = Depends(get_db)):
    company = Company(name=payload.name, address=payload.address, phone=payload.phone)
    db.add(company)
    db.commit()
    db.refresh(company)
    return company
