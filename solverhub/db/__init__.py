"""
Database module - engine, sessions and table definitions.
"""
from solverhub.db.postgres import get_db_session, init_db, test_postgres_connection

__all__ = [
    "get_db_session",
    "init_db",
    "test_postgres_connection",
]
