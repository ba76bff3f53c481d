"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from talentflow.api.routes.student_routes import router as student_router
from talentflow.api.routes.company_routes import router as company_router
from talentflow.api.routes.internship_routes import router as internship_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(student_router)
api_router.include_router(company_router)
api_router.include_router(internship_router)
