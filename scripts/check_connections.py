#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify configuration and the database connection.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from solverhub.core.config import get_settings
from solverhub.db.postgres import test_postgres_connection


def mask(url: str) -> str:
    """Hide the password part of a database URL."""
    if "@" not in url or "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    creds, host = rest.rsplit("@", 1)
    user = creds.split(":", 1)[0]
    return f"{scheme}://{user}:****@{host}"


def main():
    settings = get_settings()
    print("=" * 50)
    print("SOLVERHUB - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Configuration...")
    if settings.is_configured:
        print("    ✅ Backend endpoint and signing key set")
    else:
        print("    ❌ Missing backend configuration (DATABASE_URL / JWT_SECRET_KEY)")

    print("\n[2] Testing database...")
    print(f"    URL: {mask(settings.postgres_url)}")
    if test_postgres_connection():
        print("    ✅ Database: CONNECTED")
    else:
        print("    ❌ Database: FAILED")

    print("\n[3] Modes...")
    print(f"    Demo mode: {'on' if settings.demo_mode else 'off'}")
    print(f"    Demo accounts: {'enabled' if settings.demo_accounts_enabled else 'disabled'}")
    print(f"    Email confirmation required: {settings.require_email_confirmation}")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
