"""
Pydantic Schemas - one canonical schema per entity.

Fields are snake_case everywhere inside the service. At the HTTP edge every
schema serialises with camelCase aliases and accepts either casing on input,
so the conversion happens here and nowhere else.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    startup = "startup"
    admin = "admin"


class ExperienceLevel(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class HiringStatus(str, Enum):
    hiring = "hiring"
    not_hiring = "not_hiring"
    future_hiring = "future_hiring"


class ProblemStatus(str, Enum):
    draft = "draft"
    open = "open"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


class ApplicationStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


# Role-specific profile attributes
STUDENT_FIELDS = ("university", "major", "graduation_year", "experience_level", "areas_of_interest")
STARTUP_FIELDS = ("company_name", "company_description", "sectors", "stage", "hiring_status", "founder_names")
LIST_FIELDS = ("skills", "languages", "areas_of_interest", "sectors", "founder_names")


def strip_foreign_role_fields(role: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop attributes that belong to the other role."""
    foreign = ()
    if role == UserRole.student.value:
        foreign = STARTUP_FIELDS
    elif role == UserRole.startup.value:
        foreign = STUDENT_FIELDS
    elif role == UserRole.admin.value:
        foreign = STUDENT_FIELDS + STARTUP_FIELDS
    return {k: v for k, v in data.items() if k not in foreign}


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileFields(CamelModel):
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    skills: List[str] = []
    languages: List[str] = []
    # Student
    university: Optional[str] = None
    major: Optional[str] = None
    graduation_year: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    areas_of_interest: List[str] = []
    # Startup
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    sectors: List[str] = []
    stage: Optional[str] = None
    hiring_status: Optional[HiringStatus] = None
    founder_names: List[str] = []

    @field_validator("graduation_year", mode="before")
    @classmethod
    def year_as_text(cls, v):
        return str(v) if v is not None else v

    @field_validator(*LIST_FIELDS, mode="before")
    @classmethod
    def null_list_as_empty(cls, v):
        return [] if v is None else v


class ProfileCreate(ProfileFields):
    name: str = Field(..., min_length=1, max_length=200)
    role: UserRole

    @model_validator(mode="after")
    def clear_foreign_role_fields(self):
        keep = strip_foreign_role_fields(self.role.value, {f: True for f in type(self).model_fields})
        for field in type(self).model_fields:
            if field not in keep:
                setattr(self, field, [] if field in LIST_FIELDS else None)
        return self


class ProfileUpdate(CamelModel):
    """Partial profile update. role, id and email are not updatable."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    skills: Optional[List[str]] = None
    languages: Optional[List[str]] = None
    university: Optional[str] = None
    major: Optional[str] = None
    graduation_year: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    areas_of_interest: Optional[List[str]] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    sectors: Optional[List[str]] = None
    stage: Optional[str] = None
    hiring_status: Optional[HiringStatus] = None
    founder_names: Optional[List[str]] = None

    @field_validator("graduation_year", mode="before")
    @classmethod
    def year_as_text(cls, v):
        return str(v) if v is not None else v

    def changes(self) -> Dict[str, Any]:
        """Only the fields the caller actually sent, enum values unwrapped."""
        return self.model_dump(exclude_unset=True, mode="json")


class Profile(ProfileFields):
    id: str
    email: str
    name: str
    role: UserRole
    featured: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================
# PROBLEM SCHEMAS
# ============================================================

class ProblemCreate(CamelModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: str = Field(..., min_length=1)
    required_skills: List[str] = []
    experience_level: ExperienceLevel = ExperienceLevel.intermediate
    compensation: Optional[str] = None
    additional_info: Optional[str] = None
    deadline: Optional[datetime] = None
    status: ProblemStatus = ProblemStatus.open


class ProblemStatusUpdate(CamelModel):
    status: ProblemStatus


class Problem(CamelModel):
    id: str
    title: str
    description: str
    startup_id: str
    startup: Optional[Profile] = None
    required_skills: List[str] = []
    experience_level: ExperienceLevel
    compensation: Optional[str] = None
    additional_info: Optional[str] = None
    deadline: Optional[datetime] = None
    status: ProblemStatus
    featured: bool = False
    applications_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("required_skills", mode="before")
    @classmethod
    def null_list_as_empty(cls, v):
        return [] if v is None else v


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplyRequest(CamelModel):
    cover_letter: str

    @field_validator("cover_letter")
    @classmethod
    def cover_letter_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please write a brief cover letter explaining why you're a good fit for this problem.")
        return v


class ApplicationCreate(ApplyRequest):
    problem_id: str


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus


class Application(CamelModel):
    id: str
    problem_id: str
    problem: Optional[Problem] = None
    user_id: str
    user: Optional[Profile] = None
    cover_letter: Optional[str] = None
    status: ApplicationStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================
# AUTH SCHEMAS
# ============================================================

class SignupRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    profile: ProfileCreate


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class ConfirmEmailRequest(CamelModel):
    token: str


class AuthResponse(CamelModel):
    success: bool
    error: Optional[str] = None
    user_id: Optional[str] = None
    user: Optional[Profile] = None
    access_token: Optional[str] = None
    token_type: str = "bearer"
    confirmation_token: Optional[str] = None


class SessionResponse(CamelModel):
    is_authenticated: bool
    user: Optional[Profile] = None


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
