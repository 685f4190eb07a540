"""
Solver Routes

GET /solvers - List student solvers (search, experience level, skills)
GET /solvers/skills - Skills of visible solvers
GET /solvers/{solver_id} - Solver profile
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from solverhub.core.auth import get_auth_session
from solverhub.core.session import AuthSession
from solverhub.services import profile_service
from solverhub.services.filters import collect_tags, filter_solvers, guest_view, normalize_filters
from solverhub.schemas.schemas import Profile, UserRole

router = APIRouter(prefix="/solvers", tags=["Solvers"])


@router.get("", response_model=List[Profile])
async def list_solvers(
    search: Optional[str] = Query(None, description="Search name, university, major and skills"),
    experience_level: Optional[str] = Query(None, alias="experienceLevel"),
    experience_level_snake: Optional[str] = Query(None, alias="experience_level", include_in_schema=False),
    skills: List[str] = Query([]),
    session: AuthSession = Depends(get_auth_session),
):
    """List solvers. Guests only see featured solvers."""
    experience_level = experience_level or experience_level_snake
    solvers = guest_view(profile_service.get_students(), session.is_authenticated)
    filters = normalize_filters(search, experience_level, skills)
    return filter_solvers(solvers, filters.search_term, filters.experience_level, filters.selected_skills)


@router.get("/skills", response_model=List[str])
async def list_solver_skills(session: AuthSession = Depends(get_auth_session)):
    return collect_tags(guest_view(profile_service.get_students(), session.is_authenticated))


@router.get("/{solver_id}", response_model=Profile)
async def get_solver(solver_id: str):
    solver = profile_service.get_user_by_id(solver_id)
    if not solver or solver.role != UserRole.student:
        raise HTTPException(status_code=404, detail="Solver not found")
    return solver
