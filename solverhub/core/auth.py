"""
Authentication Dependencies - resolve the request's AuthSession.

Provides FastAPI dependencies for:
- optional sessions (guests allowed)
- protected routes (any role, students only, startups only)
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from solverhub.core.session import AuthManager, AuthSession, get_auth_manager
from solverhub.schemas.schemas import UserRole

# Bearer token extractor; missing header means guest, not an error
bearer_scheme = HTTPBearer(auto_error=False)


async def get_auth_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    manager: AuthManager = Depends(get_auth_manager),
) -> AuthSession:
    """
    FastAPI dependency - the caller's session, anonymous for guests.

    Usage:
        @app.get("/public")
        async def route(session: AuthSession = Depends(get_auth_session)):
            ...
    """
    if not credentials:
        return AuthSession()
    return manager.restore_session(credentials.credentials)


async def get_current_session(session: AuthSession = Depends(get_auth_session)) -> AuthSession:
    """Dependency - require an authenticated session."""
    if not session.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


async def get_current_student(session: AuthSession = Depends(get_current_session)) -> AuthSession:
    """Dependency - require student role."""
    if session.user.role != UserRole.student:
        raise HTTPException(status_code=403, detail="Students only")
    return session


async def get_current_startup(session: AuthSession = Depends(get_current_session)) -> AuthSession:
    """Dependency - require startup role."""
    if session.user.role != UserRole.startup:
        raise HTTPException(status_code=403, detail="Startups only")
    return session
