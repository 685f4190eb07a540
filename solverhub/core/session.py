"""
Session / Auth Manager.

The current user lives in an explicit AuthSession that callers pass to every
operation needing identity. AuthManager holds no user state itself, only
auth-state listeners.

States:
    anonymous --(login / signup)--> authenticated(user) --(logout)--> anonymous

A failed attempt reports an error and leaves the session as it was.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional, Union

from solverhub.core.config import get_settings
from solverhub.core.exceptions import AuthorizationError
from solverhub.core.security import create_access_token
from solverhub.db.postgres import require_backend
from solverhub.schemas.schemas import Profile, ProfileCreate, ProfileUpdate, UserRole, strip_foreign_role_fields
from solverhub.services import profile_service
from solverhub.services.identity_service import IdentityService, normalize_email

logger = logging.getLogger(__name__)

# Fixed demo addresses that skip credential checks
DEMO_ACCOUNTS = {
    "student@example.com": UserRole.student,
    "startup@example.com": UserRole.startup,
}


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    USER_UPDATED = "USER_UPDATED"


@dataclass
class AuthSession:
    user: Optional[Profile] = None
    access_token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_demo(self) -> bool:
        return self.user is not None and self.user.id.startswith("demo-")

    def clear(self) -> None:
        self.user = None
        self.access_token = None


@dataclass
class AuthResult:
    success: bool
    error: Optional[str] = None
    user_id: Optional[str] = None
    user: Optional[Profile] = None
    access_token: Optional[str] = None
    confirmation_token: Optional[str] = None


AuthListener = Callable[[AuthEvent, AuthSession], None]


def require_role(session: AuthSession, *roles: UserRole, action: str = "do this") -> Profile:
    """Return the session's user if it has one of `roles`; demo users may only read."""
    if not session.is_authenticated:
        raise AuthorizationError(f"You must be logged in to {action}.")
    if session.user.role not in roles:
        allowed = " or ".join(r.value for r in roles)
        raise AuthorizationError(f"Only {allowed} accounts can {action}.")
    if session.is_demo:
        raise AuthorizationError("Demo accounts are read-only.")
    return session.user


class AuthManager:
    """Login, signup, logout and profile updates against an explicit session."""

    def __init__(self, identity: Optional[IdentityService] = None, settings=None):
        self.settings = settings or get_settings()
        self.identity = identity or IdentityService(self.settings)
        self._listeners: List[AuthListener] = []

    # ------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Subscribe to auth events. Returns the unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: AuthEvent, session: AuthSession) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, session)
            except Exception as e:
                logger.error(f"Auth listener failed on {event.value}: {e}")

    # ------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------

    def login(self, session: AuthSession, email: str, password: str) -> AuthResult:
        try:
            require_backend()

            demo_role = DEMO_ACCOUNTS.get(normalize_email(email))
            if demo_role and self.settings.demo_accounts_enabled:
                return self._demo_login(session, normalize_email(email), demo_role)

            identity, token = self.identity.sign_in_with_password(email, password)

            user = profile_service.get_user_by_id(identity["id"])
            if not user:
                return AuthResult(success=False, error="User profile not found. Please contact support.")

            session.user = user
            session.access_token = token
            self._emit(AuthEvent.SIGNED_IN, session)
            return AuthResult(success=True, user_id=user.id, user=user, access_token=token)
        except Exception as e:
            logger.error(f"Login error: {e}")
            return AuthResult(success=False, error=_message(e, "Failed to login. Please try again."))

    def _demo_login(self, session: AuthSession, email: str, role: UserRole) -> AuthResult:
        now = datetime.utcnow()
        user = Profile(
            id=f"demo-{role.value}-{int(time.time() * 1000)}",
            email=email,
            role=role,
            name="Demo Student" if role == UserRole.student else "Demo User",
            company_name="Demo Company" if role == UserRole.startup else None,
            created_at=now,
            updated_at=now,
        )
        token = create_access_token(data={
            "sub": user.id,
            "email": user.email,
            "role": role.value,
            "name": user.name,
            "company_name": user.company_name,
            "demo": True,
        })
        session.user = user
        session.access_token = token
        logger.info(f"Demo login as {role.value}")
        self._emit(AuthEvent.SIGNED_IN, session)
        return AuthResult(success=True, user_id=user.id, user=user, access_token=token)

    def signup(
        self,
        session: AuthSession,
        email: str,
        password: str,
        profile_data: Union[ProfileCreate, Dict[str, Any]],
    ) -> AuthResult:
        """
        Create the identity record, then the profile row.

        The two steps are not atomic: if the profile insert fails the identity
        stays behind and the caller gets "Failed to create user profile".
        """
        try:
            require_backend()

            if isinstance(profile_data, dict):
                profile_data = ProfileCreate.model_validate(profile_data)

            identity = self.identity.sign_up(email, password)

            user = profile_service.create_user({
                **profile_data.model_dump(mode="json"),
                "id": identity["id"],
                "email": identity["email"],
            })
            if not user:
                return AuthResult(success=False, error="Failed to create user profile")

            if identity.get("confirmation_token"):
                # Nothing to sign in with until the email is confirmed
                logger.info(f"Signup for {identity['email']} awaiting email confirmation")
                return AuthResult(
                    success=True,
                    user_id=user.id,
                    user=user,
                    confirmation_token=identity["confirmation_token"],
                )

            _, token = self.identity.sign_in_with_password(email, password)
            session.user = user
            session.access_token = token
            self._emit(AuthEvent.SIGNED_IN, session)
            return AuthResult(success=True, user_id=user.id, user=user, access_token=token)
        except Exception as e:
            logger.error(f"Signup error: {e}")
            return AuthResult(success=False, error=_message(e, "Failed to sign up. Please try again."))

    def confirm_email(self, token: str) -> AuthResult:
        """Redeem the confirmation token issued at signup. Does not sign in."""
        try:
            require_backend()
            user_id = self.identity.confirm_email_token(token)
            return AuthResult(success=True, user_id=user_id)
        except Exception as e:
            logger.error(f"Email confirmation error: {e}")
            return AuthResult(success=False, error=_message(e, "Failed to confirm email. Please try again."))

    def logout(self, session: AuthSession) -> None:
        try:
            if session.access_token and not session.is_demo:
                self.identity.sign_out(session.access_token)
        except Exception as e:
            logger.error(f"Logout error: {e}")
        session.clear()
        self._emit(AuthEvent.SIGNED_OUT, session)

    def update_user_profile(self, session: AuthSession, user_data: Union[ProfileUpdate, Dict[str, Any]]) -> bool:
        try:
            if not session.is_authenticated:
                logger.warning("Profile update attempted without a session")
                return False
            if session.is_demo:
                logger.warning("Profile update attempted on a demo account")
                return False

            if isinstance(user_data, dict):
                user_data = ProfileUpdate.model_validate(user_data)

            changes = strip_foreign_role_fields(session.user.role.value, user_data.changes())
            updated = profile_service.update_user(session.user.id, changes)
            if not updated:
                return False

            session.user = updated
            self._emit(AuthEvent.USER_UPDATED, session)
            return True
        except Exception as e:
            logger.error(f"Update profile error: {e}")
            return False

    def restore_session(self, token: Optional[str]) -> AuthSession:
        """Session retrieval: anonymous unless the token maps to a live session and profile."""
        if not token:
            return AuthSession()
        try:
            claims = self.identity.get_session(token)
            if not claims:
                return AuthSession()

            if claims.get("demo"):
                user = Profile(
                    id=claims["sub"],
                    email=claims["email"],
                    role=claims["role"],
                    name=claims.get("name") or "Demo User",
                    company_name=claims.get("company_name"),
                )
            else:
                user = profile_service.get_user_by_id(claims["sub"])
                if not user:
                    return AuthSession()

            return AuthSession(user=user, access_token=token)
        except Exception as e:
            logger.error(f"Error checking session: {e}")
            return AuthSession()


def _message(error: Exception, fallback: str) -> str:
    # SolverHubError subclasses carry a user-facing message; anything else gets the fallback
    return getattr(error, "message", None) or fallback


@lru_cache()
def get_auth_manager() -> AuthManager:
    return AuthManager()
