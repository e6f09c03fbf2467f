"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from internship_portal.api.routes.auth_routes import router as auth_router
from internship_portal.api.routes.internship_routes import router as internship_router
from internship_portal.api.routes.application_routes import router as application_router
from internship_portal.api.routes.profile_routes import router as profile_router
from internship_portal.api.routes.message_routes import router as message_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(internship_router)
api_router.include_router(application_router)
api_router.include_router(profile_router)
api_router.include_router(message_router)
