from fastapi import APIRouter

from dashboard.navigation import sidebar_data
from dashboard.schemas.navigation import SidebarData

router = APIRouter()


@router.get("/sidebar", response_model=SidebarData, response_model_exclude_none=True)
def get_sidebar():
    return sidebar_data
