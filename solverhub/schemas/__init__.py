"""
Schemas module - the canonical schema for each entity and the API contract.
"""
from solverhub.schemas.schemas import (
    Application,
    ApplicationStatus,
    Problem,
    ProblemStatus,
    Profile,
    UserRole,
)

__all__ = [
    "Application",
    "ApplicationStatus",
    "Problem",
    "ProblemStatus",
    "Profile",
    "UserRole",
]
