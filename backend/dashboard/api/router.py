from fastapi import APIRouter

from dashboard.api.routes import health, companies, profile, profiles, navigation

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])  # GET /, /db
api_router.include_router(companies.router, prefix="/companies", tags=["companies"])  # SUPERADMIN: GET, POST
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])  # own profile: GET, PUT; signup: POST
api_router.include_router(profiles.router, prefix="/profiles", tags=["profile"])  # SUPERADMIN: GET ?role=&active=
api_router.include_router(navigation.router, prefix="/navigation", tags=["navigation"])  # GET /sidebar
