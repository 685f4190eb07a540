"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from solverhub.api.routes.auth_routes import router as auth_router
from solverhub.api.routes.problem_routes import router as problem_router
from solverhub.api.routes.solver_routes import router as solver_router
from solverhub.api.routes.startup_routes import router as startup_router
from solverhub.api.routes.application_routes import router as application_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(problem_router)
api_router.include_router(solver_router)
api_router.include_router(startup_router)
api_router.include_router(application_router)
