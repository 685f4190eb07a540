"""
Profile Service - data access for the profiles table.

Every function issues one unit of work against the store. Store failures are
logged and come back as None / [] (see store_call).
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import insert, select, update

from solverhub.db.demo_data import demo_startups, demo_students
from solverhub.db.postgres import get_db_session, store_call
from solverhub.db.tables import profiles
from solverhub.schemas.schemas import Profile, UserRole, strip_foreign_role_fields


def row_to_profile(mapping) -> Profile:
    return Profile.model_validate(dict(mapping))


@store_call("creating user")
def create_user(user_data: Dict[str, Any]) -> Optional[Profile]:
    """
    Insert a profile row.

    Args:
        user_data: snake_case fields; must include id, email, name, role
    """
    values = strip_foreign_role_fields(user_data["role"], dict(user_data))
    now = datetime.utcnow()
    values.setdefault("created_at", now)
    values.setdefault("updated_at", now)

    with get_db_session() as db:
        db.execute(insert(profiles).values(**values))
        row = db.execute(select(profiles).where(profiles.c.id == values["id"])).fetchone()
    return row_to_profile(row._mapping) if row else None


@store_call("fetching user")
def get_user_by_id(user_id: str) -> Optional[Profile]:
    with get_db_session() as db:
        row = db.execute(select(profiles).where(profiles.c.id == user_id)).fetchone()
    return row_to_profile(row._mapping) if row else None


@store_call("updating user")
def update_user(user_id: str, user_data: Dict[str, Any]) -> Optional[Profile]:
    """Merge a partial update into a profile. None if the row doesn't exist."""
    values = {k: v for k, v in user_data.items() if k not in ("id", "email", "role", "created_at")}
    values["updated_at"] = datetime.utcnow()

    with get_db_session() as db:
        result = db.execute(update(profiles).where(profiles.c.id == user_id).values(**values))
        if result.rowcount == 0:
            return None
        row = db.execute(select(profiles).where(profiles.c.id == user_id)).fetchone()
    return row_to_profile(row._mapping)


def _profiles_with_role(role: UserRole) -> List[Profile]:
    with get_db_session() as db:
        rows = db.execute(
            select(profiles).where(profiles.c.role == role.value).order_by(profiles.c.created_at)
        ).fetchall()
    return [row_to_profile(r._mapping) for r in rows]


@store_call("fetching students", default=list, demo_fallback=demo_students)
def get_students() -> List[Profile]:
    """All solvers."""
    return _profiles_with_role(UserRole.student)


@store_call("fetching startups", default=list, demo_fallback=demo_startups)
def get_startups() -> List[Profile]:
    return _profiles_with_role(UserRole.startup)
