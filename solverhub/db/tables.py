"""
Table definitions.

Tables:
1. auth_users     - identity records (email + password hash)
2. auth_sessions  - live sign-in sessions, keyed by token jti
3. profiles       - one row per identity, id shared with auth_users
4. problems       - posted by startup profiles
5. applications   - student applications to problems

List-valued columns (skills, sectors, ...) are JSON so the same schema runs on
PostgreSQL and SQLite.
"""

from datetime import datetime

from sqlalchemy import (
    JSON, Boolean, Column, DateTime, ForeignKey, MetaData, String, Table, Text,
    UniqueConstraint,
)

metadata = MetaData()


auth_users = Table(
    "auth_users",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("email", String(255), nullable=False, unique=True, index=True),
    Column("password_hash", String(255), nullable=False),
    Column("email_confirmed", Boolean, nullable=False, default=False),
    Column("created_at", DateTime, nullable=False, default=datetime.utcnow),
)


auth_sessions = Table(
    "auth_sessions",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), ForeignKey("auth_users.id"), nullable=False, index=True),
    Column("created_at", DateTime, nullable=False, default=datetime.utcnow),
    Column("expires_at", DateTime, nullable=False),
)


profiles = Table(
    "profiles",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("email", String(255), nullable=False),
    Column("name", String(200), nullable=False),
    Column("role", String(20), nullable=False, index=True),
    Column("avatar_url", String(500)),
    Column("bio", Text),
    Column("location", String(200)),
    Column("website_url", String(500)),
    Column("linkedin_url", String(500)),
    Column("skills", JSON, nullable=False, default=list),
    Column("languages", JSON, nullable=False, default=list),
    Column("featured", Boolean, nullable=False, default=False),
    # Student
    Column("university", String(200)),
    Column("major", String(200)),
    Column("graduation_year", String(10)),
    Column("experience_level", String(20)),
    Column("areas_of_interest", JSON, nullable=False, default=list),
    # Startup
    Column("company_name", String(200)),
    Column("company_description", Text),
    Column("sectors", JSON, nullable=False, default=list),
    Column("stage", String(50)),
    Column("hiring_status", String(20)),
    Column("founder_names", JSON, nullable=False, default=list),
    Column("created_at", DateTime, nullable=False, default=datetime.utcnow),
    Column("updated_at", DateTime, nullable=False, default=datetime.utcnow),
)


problems = Table(
    "problems",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False),
    Column("startup_id", String(36), ForeignKey("profiles.id"), nullable=False, index=True),
    Column("required_skills", JSON, nullable=False, default=list),
    Column("experience_level", String(20), nullable=False),
    Column("compensation", String(100)),
    Column("additional_info", Text),
    Column("deadline", DateTime),
    Column("status", String(20), nullable=False, default="open"),
    Column("featured", Boolean, nullable=False, default=False),
    Column("created_at", DateTime, nullable=False, default=datetime.utcnow),
    Column("updated_at", DateTime, nullable=False, default=datetime.utcnow),
)


applications = Table(
    "applications",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("problem_id", String(36), ForeignKey("problems.id"), nullable=False, index=True),
    Column("user_id", String(36), ForeignKey("profiles.id"), nullable=False, index=True),
    Column("cover_letter", Text),
    Column("status", String(20), nullable=False, default="pending"),
    Column("created_at", DateTime, nullable=False, default=datetime.utcnow),
    Column("updated_at", DateTime, nullable=False, default=datetime.utcnow),
    UniqueConstraint("problem_id", "user_id", name="uq_application_problem_user"),
)
