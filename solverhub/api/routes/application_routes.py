"""
Application Routes

GET /applications/mine - Student's own applications
GET /applications/received - Applications to the startup's problems
GET /applications/{application_id} - One application (applicant or owning startup)
PUT /applications/{application_id}/status - Accept / reject (owning startup only)
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from solverhub.core.auth import get_current_session, get_current_startup, get_current_student
from solverhub.core.session import AuthSession
from solverhub.services import application_service
from solverhub.services.filters import filter_applications_by_status
from solverhub.schemas.schemas import Application, ApplicationStatus, ApplicationStatusUpdate

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("/mine", response_model=List[Application])
async def get_my_applications(
    status: Optional[ApplicationStatus] = Query(None),
    session: AuthSession = Depends(get_current_student),
):
    """Get all applications for current student."""
    applications = application_service.get_applications_for_user(session.user.id)
    return filter_applications_by_status(applications, status.value if status else None)


@router.get("/received", response_model=List[Application])
async def get_received_applications(
    status: Optional[ApplicationStatus] = Query(None),
    session: AuthSession = Depends(get_current_startup),
):
    """Get all applications for the startup's problems."""
    applications = application_service.get_applications_for_startup(session.user.id)
    return filter_applications_by_status(applications, status.value if status else None)


@router.get("/{application_id}", response_model=Application)
async def get_application(application_id: str, session: AuthSession = Depends(get_current_session)):
    application = application_service.get_application_by_id(application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")

    owner_id = application.problem.startup_id if application.problem else None
    if session.user.id not in (application.user_id, owner_id):
        raise HTTPException(status_code=404, detail="Application not found")
    return application


@router.put("/{application_id}/status", response_model=Application)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    session: AuthSession = Depends(get_current_startup),
):
    """Accept or reject a pending application."""
    application = application_service.update_application_status(session, application_id, update.status)
    if not application:
        raise HTTPException(status_code=500, detail="Failed to update the application. Please try again.")
    return application
