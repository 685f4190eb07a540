"""
Problem Routes

GET /problems - List problems (search, experience level, skills, startup)
GET /problems/skills - Skills used by visible problems
POST /problems - Post a problem (startup only)
GET /problems/{problem_id} - Problem details
PUT /problems/{problem_id}/status - Change status (owning startup only)
GET /problems/{problem_id}/applications - Applications received (owning startup only)
POST /problems/{problem_id}/apply - Apply (student only)
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from solverhub.core.auth import get_auth_session, get_current_startup, get_current_student
from solverhub.core.session import AuthSession
from solverhub.services import application_service, problem_service
from solverhub.services.filters import apply_filters, collect_tags, guest_view, normalize_filters
from solverhub.schemas.schemas import (
    Application, ApplicationCreate, ApplyRequest, Problem, ProblemCreate, ProblemStatusUpdate,
)

router = APIRouter(prefix="/problems", tags=["Problems"])


@router.get("", response_model=List[Problem])
async def list_problems(
    search: Optional[str] = Query(None, description="Search title, description, startup and skills"),
    experience_level: Optional[str] = Query(None, alias="experienceLevel", description="Level or \"all\""),
    experience_level_snake: Optional[str] = Query(None, alias="experience_level", include_in_schema=False),
    skills: List[str] = Query([], description="Keep problems requiring any of these skills"),
    startup_id: Optional[str] = Query(None, alias="startupId"),
    startup_id_snake: Optional[str] = Query(None, alias="startup_id", include_in_schema=False),
    session: AuthSession = Depends(get_auth_session),
):
    """
    List problems, newest first.

    Guests only see featured problems. Query names are accepted in either casing.
    """
    experience_level = experience_level or experience_level_snake
    startup_id = startup_id or startup_id_snake

    problems = problem_service.get_problems()
    if startup_id:
        problems = [p for p in problems if p.startup_id == startup_id]

    problems = guest_view(problems, session.is_authenticated)

    return apply_filters(problems, normalize_filters(search, experience_level, skills))


@router.get("/skills", response_model=List[str])
async def list_problem_skills(session: AuthSession = Depends(get_auth_session)):
    """Skills required by the problems the caller can see, for the skill picker."""
    problems = guest_view(problem_service.get_problems(), session.is_authenticated)
    return collect_tags(problems, "required_skills")


@router.post("", response_model=Problem, status_code=201)
async def create_problem(data: ProblemCreate, session: AuthSession = Depends(get_current_startup)):
    """Post a new problem. Only startups can post problems."""
    problem = problem_service.create_problem(session, data)
    if not problem:
        raise HTTPException(status_code=500, detail="Failed to create problem. Please try again.")
    return problem


@router.get("/{problem_id}", response_model=Problem)
async def get_problem(problem_id: str):
    problem = problem_service.get_problem_by_id(problem_id)
    if not problem:
        raise HTTPException(status_code=404, detail="Problem not found")
    return problem


@router.put("/{problem_id}/status", response_model=Problem)
async def update_problem_status(
    problem_id: str,
    update: ProblemStatusUpdate,
    session: AuthSession = Depends(get_current_startup),
):
    problem = problem_service.update_problem_status(session, problem_id, update.status)
    if not problem:
        raise HTTPException(status_code=500, detail="Failed to update problem status")
    return problem


@router.get("/{problem_id}/applications", response_model=List[Application])
async def get_problem_applications(problem_id: str, session: AuthSession = Depends(get_current_startup)):
    """Applications to one of the caller's problems."""
    problem = problem_service.get_problem_by_id(problem_id)
    if not problem or problem.startup_id != session.user.id:
        raise HTTPException(status_code=404, detail="Problem not found or access denied")
    return application_service.get_applications_for_problem(problem_id)


@router.post("/{problem_id}/apply", response_model=Application, status_code=201)
async def apply_to_problem(
    problem_id: str,
    request: ApplyRequest,
    session: AuthSession = Depends(get_current_student),
):
    """Apply to a problem. Students only. Cannot apply twice to the same problem."""
    application = application_service.create_application(
        session, ApplicationCreate(problem_id=problem_id, cover_letter=request.cover_letter)
    )
    if not application:
        raise HTTPException(status_code=500, detail="Failed to submit application. Please try again.")
    return application
