#!/usr/bin/env python3
"""
Seed Script

Creates the tables and fills an empty database with demo solvers, startups
and problems. Does nothing if profiles already exist.

Usage: python scripts/seed_demo_data.py
"""
import sys
sys.path.insert(0, '.')

from solverhub.core.logging_config import setup_logging
from solverhub.db.postgres import init_db
from solverhub.services.seed_service import populate_database


def main():
    setup_logging()
    init_db()
    ok = populate_database()
    print("Database initialization:", "successful" if ok else "failed")
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
