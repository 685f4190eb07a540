"""
Startup Routes

GET /startups - List startups (search)
GET /startups/{startup_id} - Startup profile
GET /startups/{startup_id}/problems - Problems posted by a startup
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from solverhub.core.auth import get_auth_session
from solverhub.core.session import AuthSession
from solverhub.services import problem_service, profile_service
from solverhub.services.filters import filter_startups, guest_view
from solverhub.schemas.schemas import Problem, Profile, UserRole

router = APIRouter(prefix="/startups", tags=["Startups"])


@router.get("", response_model=List[Profile])
async def list_startups(
    search: Optional[str] = Query(None, description="Search name, description and sectors"),
    session: AuthSession = Depends(get_auth_session),
):
    startups = guest_view(profile_service.get_startups(), session.is_authenticated)
    return filter_startups(startups, (search or "").strip())


@router.get("/{startup_id}", response_model=Profile)
async def get_startup(startup_id: str):
    startup = profile_service.get_user_by_id(startup_id)
    if not startup or startup.role != UserRole.startup:
        raise HTTPException(status_code=404, detail="Startup not found")
    return startup


@router.get("/{startup_id}/problems", response_model=List[Problem])
async def get_startup_problems(startup_id: str, session: AuthSession = Depends(get_auth_session)):
    """A startup's problems. The startup itself sees all of them, guests only featured ones."""
    problems = problem_service.get_problems_by_startup_id(startup_id)
    return guest_view(problems, session.is_authenticated)
