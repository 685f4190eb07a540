"""
Problem Service - data access for problems.

Reads embed the owning startup (one-hop join) and the number of
applications received. Only the owning startup may change a problem's status.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, insert, select, update

from solverhub.core.exceptions import AuthorizationError, NotFoundError
from solverhub.core.session import AuthSession, require_role
from solverhub.db.demo_data import demo_problems
from solverhub.db.postgres import get_db_session, prefixed_columns, split_row, store_call
from solverhub.db.tables import applications, problems, profiles
from solverhub.schemas.schemas import Problem, ProblemCreate, ProblemStatus, Profile, UserRole


def _problem_query():
    """problems + startup profile + applications_count, newest first."""
    startup = profiles.alias("startup")
    applications_count = (
        select(func.count(applications.c.id))
        .where(applications.c.problem_id == problems.c.id)
        .correlate(problems)
        .scalar_subquery()
        .label("applications_count")
    )
    return (
        select(problems, applications_count, *prefixed_columns(startup, "startup"))
        .select_from(problems.outerjoin(startup, problems.c.startup_id == startup.c.id))
        .order_by(problems.c.created_at.desc())
    )


def row_to_problem(mapping) -> Problem:
    data = {k: v for k, v in mapping.items() if "__" not in k}
    startup = split_row(mapping, "startup")
    data["startup"] = Profile.model_validate(startup) if startup else None
    data["applications_count"] = data.get("applications_count") or 0
    return Problem.model_validate(data)


def _fetch_problem(db, problem_id: str) -> Optional[Problem]:
    row = db.execute(_problem_query().where(problems.c.id == problem_id)).fetchone()
    return row_to_problem(row._mapping) if row else None


@store_call("creating problem")
def create_problem(session: AuthSession, problem_data: ProblemCreate) -> Optional[Problem]:
    """Post a new problem owned by the session's startup."""
    owner = require_role(session, UserRole.startup, action="post problems")

    values = problem_data.model_dump()
    values["experience_level"] = problem_data.experience_level.value
    values["status"] = problem_data.status.value

    problem_id = str(uuid.uuid4())
    now = datetime.utcnow()
    with get_db_session() as db:
        db.execute(
            insert(problems).values(
                id=problem_id,
                startup_id=owner.id,
                created_at=now,
                updated_at=now,
                **values,
            )
        )
        return _fetch_problem(db, problem_id)


@store_call("fetching problems", default=list, demo_fallback=demo_problems)
def get_problems() -> List[Problem]:
    with get_db_session() as db:
        rows = db.execute(_problem_query()).fetchall()
    return [row_to_problem(r._mapping) for r in rows]


@store_call("fetching problem")
def get_problem_by_id(problem_id: str) -> Optional[Problem]:
    with get_db_session() as db:
        return _fetch_problem(db, problem_id)


@store_call("fetching problems by startup ID", default=list)
def get_problems_by_startup_id(startup_id: str) -> List[Problem]:
    with get_db_session() as db:
        rows = db.execute(_problem_query().where(problems.c.startup_id == startup_id)).fetchall()
    return [row_to_problem(r._mapping) for r in rows]


@store_call("updating problem status")
def update_problem_status(session: AuthSession, problem_id: str, status: ProblemStatus) -> Optional[Problem]:
    owner = require_role(session, UserRole.startup, action="change problem status")

    with get_db_session() as db:
        row = db.execute(
            select(problems.c.startup_id).where(problems.c.id == problem_id)
        ).fetchone()
        if not row:
            raise NotFoundError("Problem", problem_id)
        if row.startup_id != owner.id:
            raise AuthorizationError("Only the startup that posted this problem can change its status.")

        db.execute(
            update(problems)
            .where(problems.c.id == problem_id)
            .values(status=ProblemStatus(status).value, updated_at=datetime.utcnow())
        )
        return _fetch_problem(db, problem_id)
