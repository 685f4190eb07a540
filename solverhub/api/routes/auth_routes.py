"""
Authentication Routes

POST /auth/signup - Create identity + profile, sign in
POST /auth/confirm - Confirm the email address with the token issued at signup
POST /auth/login - Login and get JWT token
POST /auth/logout - Revoke the current session
GET /auth/session - Current session (guests allowed)
GET /auth/me - Get current user's profile
PUT /auth/me - Update current user's profile
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from solverhub.core.auth import get_auth_session, get_current_session
from solverhub.core.session import AuthManager, AuthResult, AuthSession, get_auth_manager
from solverhub.schemas.schemas import (
    AuthResponse, ConfirmEmailRequest, LoginRequest, MessageResponse, Profile, ProfileUpdate, SessionResponse,
    SignupRequest,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _to_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        success=result.success,
        error=result.error,
        user_id=result.user_id,
        user=result.user,
        access_token=result.access_token,
        confirmation_token=result.confirmation_token,
    )


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(
    request: SignupRequest,
    response: Response,
    manager: AuthManager = Depends(get_auth_manager),
):
    """
    Register a new account and create its profile.

    Role is fixed here and cannot be changed later.
    When email confirmation is required no access token is returned; the
    response carries the confirmationToken to deliver to the user instead.
    """
    session = AuthSession()
    result = manager.signup(session, request.email, request.password, request.profile)
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return _to_response(result)


@router.post("/confirm", response_model=MessageResponse)
async def confirm_email(request: ConfirmEmailRequest, manager: AuthManager = Depends(get_auth_manager)):
    result = manager.confirm_email(request.token)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)
    return MessageResponse(message="Email confirmed. You can now log in.")


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    response: Response,
    manager: AuthManager = Depends(get_auth_manager),
):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    session = AuthSession()
    result = manager.login(session, request.email, request.password)
    if not result.success:
        response.status_code = status.HTTP_401_UNAUTHORIZED
    return _to_response(result)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    session: AuthSession = Depends(get_current_session),
    manager: AuthManager = Depends(get_auth_manager),
):
    manager.logout(session)
    return MessageResponse(message="You have been successfully logged out.")


@router.get("/session", response_model=SessionResponse)
async def get_session(session: AuthSession = Depends(get_auth_session)):
    return SessionResponse(is_authenticated=session.is_authenticated, user=session.user)


@router.get("/me", response_model=Profile)
async def get_me(session: AuthSession = Depends(get_current_session)):
    """Get current authenticated user's profile."""
    return session.user


@router.put("/me", response_model=Profile)
async def update_me(
    data: ProfileUpdate,
    session: AuthSession = Depends(get_current_session),
    manager: AuthManager = Depends(get_auth_manager),
):
    """Update profile. Only provided fields are updated."""
    if not manager.update_user_profile(session, data):
        raise HTTPException(status_code=400, detail="Failed to update profile. Please try again.")
    return session.user
