"""
Identity Service - the built-in identity provider.

Owns the auth_users and auth_sessions tables:
- sign_up: create an identity record (email + bcrypt hash)
- sign_in_with_password: verify credentials, open a session, issue a JWT
- confirm_email_token: confirm an address from the signed token issued at signup
- sign_out: revoke the session behind a token
- get_session: resolve a token to its claims if the session is still live

Profiles are NOT created here; the session manager does that as a second,
separate step.
"""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional, Tuple

from sqlalchemy import delete, insert, select, update

from solverhub.core.config import get_settings
from solverhub.core.exceptions import IdentityError
from solverhub.core.security import (
    create_access_token, decode_token, hash_password, token_lifetime, verify_password,
)
from solverhub.db.postgres import get_db_session
from solverhub.db.tables import auth_sessions, auth_users

logger = logging.getLogger(__name__)

CONFIRMATION_PURPOSE = "email_confirmation"
CONFIRMATION_LIFETIME = timedelta(days=2)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class IdentityService:
    """Password identity provider backed by the SQL store."""

    def __init__(self, settings=None):
        self.settings = settings or get_settings()

    def sign_up(self, email: str, password: str) -> dict:
        """
        Create an identity record.

        Returns:
            {"id", "email", "email_confirmed", "confirmation_token"}
            confirmation_token is None unless confirmation is required

        Raises:
            IdentityError: email already registered
        """
        email = normalize_email(email)
        with get_db_session() as db:
            existing = db.execute(
                select(auth_users.c.id).where(auth_users.c.email == email)
            ).fetchone()
            if existing:
                raise IdentityError("User already registered", code="USER_EXISTS")

            user_id = str(uuid.uuid4())
            confirmed = not self.settings.require_email_confirmation
            db.execute(
                insert(auth_users).values(
                    id=user_id,
                    email=email,
                    password_hash=hash_password(password),
                    email_confirmed=confirmed,
                    created_at=datetime.utcnow(),
                )
            )

        logger.info(f"Identity created for {email}")
        return {
            "id": user_id,
            "email": email,
            "email_confirmed": confirmed,
            "confirmation_token": None if confirmed else self.create_confirmation_token(user_id),
        }

    def sign_in_with_password(self, email: str, password: str) -> Tuple[dict, str]:
        """
        Verify credentials and open a session.

        Returns:
            (identity dict, access token)

        Raises:
            IdentityError: bad credentials or unconfirmed email
        """
        email = normalize_email(email)
        with get_db_session() as db:
            row = db.execute(
                select(auth_users).where(auth_users.c.email == email)
            ).fetchone()

            if not row or not verify_password(password, row.password_hash):
                raise IdentityError("Invalid login credentials", code="INVALID_CREDENTIALS")

            if self.settings.require_email_confirmation and not row.email_confirmed:
                raise IdentityError("Email not confirmed", code="EMAIL_NOT_CONFIRMED")

            session_id = str(uuid.uuid4())
            now = datetime.utcnow()
            db.execute(
                insert(auth_sessions).values(
                    id=session_id,
                    user_id=row.id,
                    created_at=now,
                    expires_at=now + token_lifetime(),
                )
            )

        token = create_access_token(data={"sub": row.id, "email": row.email, "jti": session_id})
        return {"id": row.id, "email": row.email, "email_confirmed": row.email_confirmed}, token

    def create_confirmation_token(self, user_id: str) -> str:
        return create_access_token(
            data={"sub": user_id, "purpose": CONFIRMATION_PURPOSE},
            expires_delta=CONFIRMATION_LIFETIME,
        )

    def confirm_email_token(self, token: str) -> str:
        """
        Confirm the address behind a confirmation token.

        Returns:
            the confirmed user id

        Raises:
            IdentityError: bad or expired token, or no such user
        """
        payload = decode_token(token)
        if not payload or payload.get("purpose") != CONFIRMATION_PURPOSE or not payload.get("sub"):
            raise IdentityError("Invalid or expired confirmation link", code="INVALID_CONFIRMATION")
        if not self.confirm_email(payload["sub"]):
            raise IdentityError("Invalid or expired confirmation link", code="INVALID_CONFIRMATION")
        logger.info(f"Email confirmed for user {payload['sub']}")
        return payload["sub"]

    def confirm_email(self, user_id: str) -> bool:
        with get_db_session() as db:
            result = db.execute(
                update(auth_users).where(auth_users.c.id == user_id).values(email_confirmed=True)
            )
        return result.rowcount > 0

    def sign_out(self, token: str) -> None:
        """Revoke the session behind a token. Unknown or expired tokens are ignored."""
        payload = decode_token(token)
        if not payload or not payload.get("jti"):
            return
        with get_db_session() as db:
            db.execute(delete(auth_sessions).where(auth_sessions.c.id == payload["jti"]))

    def get_session(self, token: str) -> Optional[dict]:
        """
        Resolve a token to its claims.

        Demo tokens carry their own claims and have no session row. Every
        other token must point at a live auth_sessions row.
        """
        payload = decode_token(token)
        if not payload or not payload.get("sub"):
            return None

        if payload.get("demo"):
            return payload if self.settings.demo_accounts_enabled else None

        session_id = payload.get("jti")
        if not session_id:
            return None

        with get_db_session() as db:
            row = db.execute(
                select(auth_sessions.c.expires_at).where(
                    auth_sessions.c.id == session_id,
                    auth_sessions.c.user_id == payload["sub"],
                )
            ).fetchone()

        if not row or row.expires_at < datetime.utcnow():
            return None
        return payload
