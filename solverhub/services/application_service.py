"""
Application Service - data access for applications.

Status transitions:
    pending -> accepted
    pending -> rejected
Nothing else. Only the startup owning the problem may perform them.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError

from solverhub.core.exceptions import (
    AuthorizationError, DuplicateApplicationError, InvalidStatusTransition, NotFoundError, ValidationError,
)
from solverhub.core.session import AuthSession, require_role
from solverhub.db.postgres import get_db_session, prefixed_columns, split_row, store_call
from solverhub.db.tables import applications, problems, profiles
from solverhub.schemas.schemas import (
    Application, ApplicationCreate, ApplicationStatus, Problem, ProblemStatus, Profile, UserRole,
)

ALLOWED_TRANSITIONS = {
    ApplicationStatus.pending: {ApplicationStatus.accepted, ApplicationStatus.rejected},
    ApplicationStatus.accepted: set(),
    ApplicationStatus.rejected: set(),
}


def can_transition(current: ApplicationStatus, requested: ApplicationStatus) -> bool:
    return ApplicationStatus(requested) in ALLOWED_TRANSITIONS[ApplicationStatus(current)]


def _application_query(with_problem: bool = True, with_startup: bool = False, with_user: bool = False):
    problem = problems.alias("problem")
    startup = profiles.alias("startup")
    user = profiles.alias("user")

    columns = [applications]
    joined = applications
    if with_problem or with_startup:
        columns += prefixed_columns(problem, "problem")
        joined = joined.outerjoin(problem, applications.c.problem_id == problem.c.id)
    if with_startup:
        columns += prefixed_columns(startup, "startup")
        joined = joined.outerjoin(startup, problem.c.startup_id == startup.c.id)
    if with_user:
        columns += prefixed_columns(user, "user")
        joined = joined.outerjoin(user, applications.c.user_id == user.c.id)

    return select(*columns).select_from(joined).order_by(applications.c.created_at.desc()), problem


def row_to_application(mapping) -> Application:
    data = {k: v for k, v in mapping.items() if "__" not in k}

    problem = split_row(mapping, "problem")
    if problem:
        startup = split_row(mapping, "startup")
        problem["startup"] = Profile.model_validate(startup) if startup else None
        data["problem"] = Problem.model_validate(problem)

    user = split_row(mapping, "user")
    data["user"] = Profile.model_validate(user) if user else None
    return Application.model_validate(data)


def _fetch_application(db, application_id: str) -> Optional[Application]:
    query, _ = _application_query(with_problem=True, with_startup=True, with_user=True)
    row = db.execute(query.where(applications.c.id == application_id)).fetchone()
    return row_to_application(row._mapping) if row else None


def _already_applied(db, problem_id: str, user_id: str) -> bool:
    row = db.execute(
        select(applications.c.id).where(
            applications.c.problem_id == problem_id,
            applications.c.user_id == user_id,
        )
    ).fetchone()
    return row is not None


@store_call("creating application")
def create_application(session: AuthSession, application_data: ApplicationCreate) -> Optional[Application]:
    """
    Apply to a problem as the session's student.

    Raises:
        NotFoundError: problem doesn't exist
        ValidationError: problem is not open
        DuplicateApplicationError: student already applied
    """
    student = require_role(session, UserRole.student, action="apply to problems")
    problem_id = application_data.problem_id

    with get_db_session() as db:
        row = db.execute(select(problems.c.status).where(problems.c.id == problem_id)).fetchone()
        if not row:
            raise NotFoundError("Problem", problem_id)
        if row.status != ProblemStatus.open.value:
            raise ValidationError("Problem is not accepting applications")

        if _already_applied(db, problem_id, student.id):
            raise DuplicateApplicationError(problem_id)

        application_id = str(uuid.uuid4())
        now = datetime.utcnow()
        try:
            db.execute(
                insert(applications).values(
                    id=application_id,
                    problem_id=problem_id,
                    user_id=student.id,
                    cover_letter=application_data.cover_letter,
                    status=ApplicationStatus.pending.value,
                    created_at=now,
                    updated_at=now,
                )
            )
        except IntegrityError:
            # A concurrent request won the unique (problem_id, user_id) slot
            raise DuplicateApplicationError(problem_id)
        return _fetch_application(db, application_id)


@store_call("fetching application")
def get_application_by_id(application_id: str) -> Optional[Application]:
    with get_db_session() as db:
        return _fetch_application(db, application_id)


@store_call("fetching applications for user", default=list)
def get_applications_for_user(user_id: str) -> List[Application]:
    """A solver's applications, each with its problem and that problem's startup."""
    query, _ = _application_query(with_problem=True, with_startup=True)
    with get_db_session() as db:
        rows = db.execute(query.where(applications.c.user_id == user_id)).fetchall()
    return [row_to_application(r._mapping) for r in rows]


@store_call("fetching applications for problem", default=list)
def get_applications_for_problem(problem_id: str) -> List[Application]:
    """Applications to one problem, each with the applicant's profile."""
    query, _ = _application_query(with_problem=False, with_user=True)
    with get_db_session() as db:
        rows = db.execute(query.where(applications.c.problem_id == problem_id)).fetchall()
    return [row_to_application(r._mapping) for r in rows]


@store_call("fetching applications for startup", default=list)
def get_applications_for_startup(startup_id: str) -> List[Application]:
    """Every application to any problem the startup posted."""
    query, problem = _application_query(with_problem=True, with_user=True)
    with get_db_session() as db:
        rows = db.execute(query.where(problem.c.startup_id == startup_id)).fetchall()
    return [row_to_application(r._mapping) for r in rows]


@store_call("updating application status")
def update_application_status(
    session: AuthSession,
    application_id: str,
    status: ApplicationStatus,
) -> Optional[Application]:
    """
    Accept or reject a pending application.

    Raises:
        NotFoundError: application doesn't exist
        AuthorizationError: caller doesn't own the problem
        InvalidStatusTransition: application is no longer pending
    """
    owner = require_role(session, UserRole.startup, action="review applications")
    status = ApplicationStatus(status)

    with get_db_session() as db:
        row = db.execute(
            select(applications.c.status, problems.c.startup_id)
            .select_from(applications.join(problems, applications.c.problem_id == problems.c.id))
            .where(applications.c.id == application_id)
        ).fetchone()
        if not row:
            raise NotFoundError("Application", application_id)
        if row.startup_id != owner.id:
            raise AuthorizationError("Only the startup that posted this problem can review its applications.")
        if not can_transition(row.status, status):
            raise InvalidStatusTransition(row.status, status.value)

        # Only pending rows can be decided; a concurrent review may have got there first
        result = db.execute(
            update(applications)
            .where(
                applications.c.id == application_id,
                applications.c.status == ApplicationStatus.pending.value,
            )
            .values(status=status.value, updated_at=datetime.utcnow())
        )
        if result.rowcount == 0:
            current = db.execute(
                select(applications.c.status).where(applications.c.id == application_id)
            ).scalar()
            raise InvalidStatusTransition(current, status.value)
        return _fetch_application(db, application_id)
