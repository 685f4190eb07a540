"""
Seed Service - populate an empty database with the demo catalogue.

Seeded profiles have no identity record, so nobody can sign in as them;
they exist to be browsed.
"""

import logging
from datetime import datetime

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError

from solverhub.db.demo_data import demo_problems, demo_startups, demo_students
from solverhub.db.postgres import get_db_session
from solverhub.db.tables import problems, profiles

logger = logging.getLogger(__name__)

PROBLEM_COLUMNS = {c.name for c in problems.c}


def _enum_values(row: dict) -> dict:
    now = datetime.utcnow()
    for key, value in row.items():
        row[key] = getattr(value, "value", value)
    row["created_at"] = row.get("created_at") or now
    row["updated_at"] = row.get("updated_at") or now
    return row


def _profile_row(profile) -> dict:
    return _enum_values(profile.model_dump())


def _problem_row(problem) -> dict:
    row = {k: v for k, v in problem.model_dump().items() if k in PROBLEM_COLUMNS}
    return _enum_values(row)


def populate_database() -> bool:
    """
    Insert demo solvers, startups and problems if the profiles table is empty.

    Returns:
        True when the data is present afterwards (seeded now or already there)
    """
    try:
        with get_db_session() as db:
            existing = db.execute(select(profiles.c.id).limit(1)).fetchone()
            if existing:
                logger.info("Database already contains data, skipping population.")
                return True

            logger.info("Populating database with demo data...")
            db.execute(insert(profiles), [_profile_row(p) for p in demo_students() + demo_startups()])
            db.execute(insert(problems), [_problem_row(p) for p in demo_problems()])

        logger.info("Database successfully populated with demo data")
        return True
    except SQLAlchemyError as e:
        logger.error(f"Error populating database: {e}")
        return False
