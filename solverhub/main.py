"""
SolverHub - Main Application

FastAPI backend with:
- SQL store for profiles, problems and applications
- Built-in identity service issuing JWT sessions
- In-memory search / facet / skill filtering on list endpoints

Run: uvicorn solverhub.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from solverhub import __version__
from solverhub.api.routes import api_router
from solverhub.core.config import get_settings
from solverhub.core.exceptions import register_exception_handlers
from solverhub.core.logging_config import setup_logging
from solverhub.db.postgres import init_db, test_postgres_connection
from solverhub.services.seed_service import populate_database

settings = get_settings()
setup_logging()

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="SolverHub",
    description="""
    A marketplace matching student solvers with startups.

    ## Features
    - **Authentication**: signup, login, logout, session lookup
    - **Profiles**: student and startup profiles, role fixed at signup
    - **Problems**: startups post problems; search, filter by level and skills
    - **Applications**: students apply, startups accept or reject
    - **Guests**: see featured problems, solvers and startups only
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Check configuration, create tables, optionally seed demo data."""
    if not settings.is_configured:
        logger.error("Missing backend configuration. Please set DATABASE_URL and JWT_SECRET_KEY.")
        return

    try:
        if settings.auto_create_tables:
            init_db()
            logger.info("Database tables ready")
        if settings.seed_demo_data:
            populate_database()
    except SQLAlchemyError as e:
        logger.warning(f"Database initialization failed: {e}")


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "SolverHub", "configured": settings.is_configured}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected" if test_postgres_connection() else "disconnected",
        "demo_mode": settings.demo_mode,
    }
